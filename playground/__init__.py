"""Terminal playground for a remote code formatting service."""

__version__ = "0.1.0"
