"""Reading and writing grids and images."""
