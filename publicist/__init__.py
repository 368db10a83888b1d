"""Bump, bundle and tag a package release."""

__version__ = "0.1.0"
