"""effect-analyzer: find React effects you might not need."""

__version__ = "0.1.0"
