"""Command-line interface for mpdetail."""
