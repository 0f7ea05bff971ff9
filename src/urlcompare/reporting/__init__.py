"""Rendering and export of parsed URLs and comparison results."""
