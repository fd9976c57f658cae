"""Status Timeline - lay out and interact with historical status intervals."""

__version__ = "0.1.0"
