"""MAP score percentile conversion and tutoring projection service."""

__version__ = "1.0.0"
