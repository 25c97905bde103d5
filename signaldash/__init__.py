"""Stock signal dashboard backend: sentiment signal viewer and basket store."""

__version__ = "1.0.0"
