"""Command line interface for flatini."""

from .main import app
