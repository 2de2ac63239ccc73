"""Formatting HTTP service."""
