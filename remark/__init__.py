"""Remark: threaded comments with bounded reply depth."""

__version__ = "0.1.0"
