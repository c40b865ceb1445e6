"""mc: a client for cloud storage and filesystems."""

__version__ = "0.1.0"
