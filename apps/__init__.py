"""Caller applications — command line and HTTP service."""
