"""Command-line interface for cube drafting tools."""
