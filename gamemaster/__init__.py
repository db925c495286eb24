"""Turn-based game sessions with a minimax game master."""

__version__ = "0.1.0"
