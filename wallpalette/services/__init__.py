"""
Wallpalette Services
Image loading, color processing, caching and the extraction entry point.
"""
