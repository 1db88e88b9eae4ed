"""Shared utilities for hetki."""
