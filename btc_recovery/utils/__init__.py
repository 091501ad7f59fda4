"""Utilities for the Bitcoin recovery client."""
