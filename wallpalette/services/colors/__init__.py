"""
Wallpalette Colors Module

Provides median-cut quantization, image classification, palette strategies
and brightness normalization for 16-color ANSI palettes.
"""

__version__ = "1.0.0"
