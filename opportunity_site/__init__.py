"""Static site core for student opportunity listings."""

__version__ = "1.0.0"
