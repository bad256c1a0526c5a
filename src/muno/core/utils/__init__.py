"""Shared utilities for Muno core."""
