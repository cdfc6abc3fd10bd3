"""inhand — India new-regime CTC to in-hand salary calculator."""

__version__ = "0.1.0"
