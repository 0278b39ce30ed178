"""Convert styled (rich) text into markdown source."""

__version__ = "0.1.0"
