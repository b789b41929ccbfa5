"""FastAPI web service for the localization pipeline."""
