"""Workspace config records, loading and persistence.

The :class:`~muno.core.workspace.manager.Workspace` facade lives in
``muno.core.workspace.manager``; it depends on the tree package, which in turn
depends on the loader exported here.
"""
from __future__ import annotations

from .loader import (
    ConfigDocument,
    ConfigLoader,
    GenericDocument,
    WorkspaceDocument,
    document_kind,
    find_config_file,
    load_config_record,
    parse_config_record,
    save_config_record,
)
from .models import ConfigRecord, FetchMode, NodeDefinition, WorkspaceDescriptor

__all__ = [
    "ConfigDocument",
    "ConfigLoader",
    "GenericDocument",
    "WorkspaceDocument",
    "document_kind",
    "find_config_file",
    "load_config_record",
    "parse_config_record",
    "save_config_record",
    "ConfigRecord",
    "FetchMode",
    "NodeDefinition",
    "WorkspaceDescriptor",
]
