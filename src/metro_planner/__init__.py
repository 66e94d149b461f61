"""Route planning for fixed-topology metro networks."""

__version__ = "0.1.0"
