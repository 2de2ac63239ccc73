"""Formatter command line."""
