"""yanker - open graphs for a proof-net style diagram editor."""

__version__ = "0.1.0"
