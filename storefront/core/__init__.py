"""Core utilities: errors and logging setup."""
