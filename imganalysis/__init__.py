"""Texture (GLCM inverse difference moment) and shape (maximum diameter) analysis of images."""

__version__ = "1.0.0"