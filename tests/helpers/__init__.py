"""Shared helpers for the muno test-suite."""
