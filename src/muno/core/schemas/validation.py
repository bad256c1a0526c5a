"""Schema validation for workspace configs.

Schemas are JSON Schema documents written in YAML and bundled under
``muno.data/schemas``.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from muno.data import read_yaml


@lru_cache(maxsize=8)
def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema, appending ``.schema.yaml`` when no extension is given."""
    filename = schema_name if schema_name.endswith((".yaml", ".yml")) else f"{schema_name}.schema.yaml"
    schema = read_yaml("schemas", filename)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


@lru_cache(maxsize=8)
def _validator(schema_name: str) -> Draft202012Validator:
    return Draft202012Validator(load_schema(schema_name))


def schema_errors(payload: Any, schema_name: str) -> List[str]:
    """Return readable validation errors (empty when the payload is valid)."""
    errors: List[str] = []
    for error in sorted(_validator(schema_name).iter_errors(payload), key=lambda e: list(map(str, e.path))):
        if error.path:
            location = ".".join(str(p) for p in error.path)
            errors.append(f"{location}: {error.message}")
        else:
            errors.append(error.message)
    return errors


__all__ = ["load_schema", "schema_errors"]
