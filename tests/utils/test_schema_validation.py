from __future__ import annotations

from muno.core.schemas import load_schema, schema_errors


def test_workspace_schema_is_bundled() -> None:
    schema = load_schema("workspace")

    assert schema["required"] == ["workspace"]
    assert load_schema("workspace.schema.yaml") == schema


def test_valid_config_has_no_errors() -> None:
    payload = {"workspace": {"name": "ws"}, "nodes": [{"name": "a", "url": "u"}]}

    assert schema_errors(payload, "workspace") == []


def test_errors_carry_dotted_locations() -> None:
    payload = {"workspace": {"name": "ws"}, "nodes": [{"name": "a/b", "fetch": "sometimes"}]}

    errors = schema_errors(payload, "workspace")

    assert len(errors) == 2
    assert all(e.startswith("nodes.0.") for e in errors)
    assert any(e.startswith("nodes.0.fetch:") for e in errors)


def test_missing_workspace_reports_at_top_level() -> None:
    errors = schema_errors({"nodes": []}, "workspace")

    assert errors == ["'workspace' is a required property"]
