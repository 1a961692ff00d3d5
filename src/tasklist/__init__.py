"""In-memory project/task tracker with a console and an HTTP front-end."""

__version__ = "0.1.0"
