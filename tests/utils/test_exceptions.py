from __future__ import annotations

from muno.core.exceptions import (
    ConfigParseError,
    InvalidConfigTypeError,
    MunoError,
    NodeNotFoundError,
    WorkspaceNotFoundError,
)


def test_errors_share_a_base_and_json_payload() -> None:
    err = NodeNotFoundError("/team")

    assert isinstance(err, MunoError)
    assert err.to_json_error() == {
        "message": "node not found: /team",
        "code": "NodeNotFoundError",
        "context": {"path": "/team"},
    }


def test_builtin_bases_are_preserved() -> None:
    assert isinstance(ConfigParseError("bad", path="x.yaml"), ValueError)
    assert isinstance(InvalidConfigTypeError({}), TypeError)
    assert isinstance(WorkspaceNotFoundError("nope"), FileNotFoundError)
    assert str(InvalidConfigTypeError([])) == "expected ConfigRecord, got list"
    assert str(ConfigParseError("bad", path="x.yaml")) == "x.yaml: bad"
