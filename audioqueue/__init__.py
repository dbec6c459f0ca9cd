"""
AudioQueue - Personal audiobook and podcast library tracker.
"""
__version__ = '0.1.0'
