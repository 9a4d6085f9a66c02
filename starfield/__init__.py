"""Animated, depth-layered starfield backdrop for PyQt5 windows."""

__version__ = "0.3.0"
