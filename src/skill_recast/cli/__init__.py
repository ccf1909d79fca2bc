"""Command-line interface for skill-recast."""
