"""Plotting backends for height grids."""
