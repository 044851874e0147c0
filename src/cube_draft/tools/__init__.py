"""Draft analysis tools."""
