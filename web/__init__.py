"""
Web interface module for clipboard OCR.

Provides a Flask-based JSON API that accepts pasted images and returns the
preprocessed image or the recognized text.
"""

from .app import create_app, main

__all__ = ["create_app", "main"]
