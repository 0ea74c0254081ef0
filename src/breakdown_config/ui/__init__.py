"""Command-line surface for breakdown-config."""
