"""Resampling weights and resolution selection."""
