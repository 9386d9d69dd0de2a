"""A small content-addressed version control system with branches, tags and a staging index."""

__version__ = "0.1.0"