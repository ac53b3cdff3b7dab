"""Time-tracking models, reports, settings, encryption and a sync client."""

__version__ = "25.3.0"