"""
argumenter: generates Go `Valid() error` methods from `arg:"..."` struct tags.
"""

__version__ = "0.1.0"
