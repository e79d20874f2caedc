"""Version information for TeamPulse Analytics."""

__version__ = "0.4.0"
