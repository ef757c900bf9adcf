"""Pulse Feed: a small social feed API with live updates."""

__version__ = "0.1.0"
