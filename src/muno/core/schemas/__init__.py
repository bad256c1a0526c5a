"""JSON Schema validation for Muno documents."""
from __future__ import annotations

from .validation import load_schema, schema_errors

__all__ = ["load_schema", "schema_errors"]
