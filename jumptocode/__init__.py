"""Jump from a rendered React element to the source line that declared it."""

__version__ = "0.8.0"
