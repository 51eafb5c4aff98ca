"""Utilities for serializeql."""
