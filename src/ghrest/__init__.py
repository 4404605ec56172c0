"""ghrest: a small, typed client for the GitHub REST API."""

__version__ = "0.4.0"
