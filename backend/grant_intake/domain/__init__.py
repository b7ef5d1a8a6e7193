"""Domain layer.

Pure transformations without I/O:
- transformers: stored application → notification text
"""
