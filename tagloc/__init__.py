"""Tagged-text localization pipeline with per-locale risk scanning."""

__version__ = "0.1.0"
