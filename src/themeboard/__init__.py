"""Themeboard: themed posts, comments and likes over HTTP/JSON."""

__version__ = "0.1.0"
