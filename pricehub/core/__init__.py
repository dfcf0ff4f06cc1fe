"""Core settings and process-wide helpers."""
