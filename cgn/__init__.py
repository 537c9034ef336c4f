"""Campus Gaming Network validation and record mapping core."""

__version__ = "0.1.0"
