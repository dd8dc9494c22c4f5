"""Matplotlib previews of grids, images and pyramids."""
