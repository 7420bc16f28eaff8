"""Compare accessibility issues with all recent issues of a GitHub repository."""

__version__ = "0.1.0"
