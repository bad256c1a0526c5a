"""Loading and saving workspace config files.

Two document shapes are recognised, chosen by :func:`document_kind`:

- ``workspace``: a conventional config file name (``muno.yaml`` and friends),
  parsed into a strongly typed :class:`ConfigRecord`
- ``generic``: any other YAML file, kept as plain data
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Sequence, Union

import yaml

from muno.core.exceptions import ConfigParseError
from muno.core.fs import FileSystem, LocalFileSystem, PathLike
from muno.core.schemas import schema_errors
from muno.core.utils.io import dump_yaml_string, parse_yaml_bytes

from .models import ConfigRecord

logger = logging.getLogger(__name__)

WORKSPACE_SCHEMA = "workspace"
YAML_SUFFIXES = (".yaml", ".yml")

DocumentKind = Literal["workspace", "generic"]


def _config_file_names(names: Optional[Sequence[str]]) -> Sequence[str]:
    if names is not None:
        return names
    from muno.core.config import WorkspaceSettings

    return WorkspaceSettings().config_file_names


def _semantic_errors(data: Dict[str, Any]) -> list[str]:
    errors: list[str] = []
    seen: set[str] = set()
    for idx, node in enumerate(data.get("nodes") or []):
        name = str(node.get("name", ""))
        if name in {".", ".."}:
            errors.append(f"nodes.{idx}.name: '{name}' is not a valid node name")
        if name in seen:
            errors.append(f"nodes.{idx}.name: duplicate node name '{name}'")
        seen.add(name)
        has_url = bool(node.get("url"))
        has_file = bool(node.get("file"))
        if has_url and has_file:
            errors.append(f"node {name} cannot have both url and file")
        elif not has_url and not has_file:
            errors.append(f"node {name} must have either url or file")
    return errors


def parse_config_record(content: bytes | str, *, source: Optional[str] = None) -> ConfigRecord:
    """Parse and validate workspace config content.

    Raises:
        ConfigParseError: If the content is not valid YAML, is not a mapping,
            or violates the workspace schema
    """
    try:
        data = parse_yaml_bytes(content)
    except (yaml.YAMLError, UnicodeDecodeError) as exc:
        raise ConfigParseError(f"invalid YAML: {exc}", path=source) from exc

    if not isinstance(data, dict):
        raise ConfigParseError(
            f"config must be a YAML mapping, got {type(data).__name__}", path=source
        )

    errors = schema_errors(data, WORKSPACE_SCHEMA) or _semantic_errors(data)
    if errors:
        raise ConfigParseError("invalid configuration: " + "; ".join(errors), path=source)

    return ConfigRecord.from_dict(data, source=source)


def load_config_record(path: PathLike, fs: Optional[FileSystem] = None) -> ConfigRecord:
    """Read and parse a workspace config file.

    Raises:
        ConfigParseError: If the file cannot be read or is malformed
    """
    fs = fs or LocalFileSystem()
    source = str(path)
    try:
        content = fs.read_file(source)
    except OSError as exc:
        raise ConfigParseError(f"cannot read config: {exc}", path=source) from exc
    return parse_config_record(content, source=source)


def save_config_record(path: PathLike, record: ConfigRecord, fs: Optional[FileSystem] = None) -> None:
    """Write ``record`` to ``path`` atomically."""
    fs = fs or LocalFileSystem()
    fs.write_file(str(path), dump_yaml_string(record.to_dict()).encode("utf-8"))
    record.source = str(path)


def find_config_file(
    directory: PathLike,
    names: Optional[Sequence[str]] = None,
    fs: Optional[FileSystem] = None,
) -> Optional[str]:
    """Return the first conventional config file present in ``directory``."""
    fs = fs or LocalFileSystem()
    for name in _config_file_names(names):
        candidate = os.path.join(str(directory), name)
        if fs.exists(candidate) and not fs.is_dir(candidate):
            return candidate
    return None


# ---------------------------------------------------------------------------
# Tagged documents
# ---------------------------------------------------------------------------


@dataclass
class WorkspaceDocument:
    record: ConfigRecord
    kind: Literal["workspace"] = "workspace"


@dataclass
class GenericDocument:
    data: Any
    kind: Literal["generic"] = "generic"


ConfigDocument = Union[WorkspaceDocument, GenericDocument]


def document_kind(path: PathLike, names: Optional[Sequence[str]] = None) -> DocumentKind:
    """Decide how a config file is parsed, from its name alone.

    Raises:
        ConfigParseError: For non-YAML files
    """
    base = os.path.basename(str(path))
    if base in _config_file_names(names):
        return "workspace"
    if base.endswith(YAML_SUFFIXES):
        return "generic"
    raise ConfigParseError(f"unsupported config format: {os.path.splitext(base)[1] or base}", path=str(path))


class ConfigLoader:
    """Load and save config documents, caching them per path."""

    def __init__(
        self,
        fs: Optional[FileSystem] = None,
        *,
        config_file_names: Optional[Sequence[str]] = None,
    ) -> None:
        self.fs = fs or LocalFileSystem()
        self._names = list(_config_file_names(config_file_names))
        self._cache: Dict[str, ConfigDocument] = {}

    def load(self, path: PathLike) -> ConfigDocument:
        key = str(path)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        doc: ConfigDocument
        if document_kind(key, self._names) == "workspace":
            doc = WorkspaceDocument(load_config_record(key, self.fs))
        else:
            try:
                data = parse_yaml_bytes(self.fs.read_file(key))
            except OSError as exc:
                raise ConfigParseError(f"cannot read config: {exc}", path=key) from exc
            except (yaml.YAMLError, UnicodeDecodeError) as exc:
                raise ConfigParseError(f"invalid YAML: {exc}", path=key) from exc
            doc = GenericDocument(data)
        self._cache[key] = doc
        return doc

    def load_record(self, path: PathLike) -> ConfigRecord:
        """Load ``path`` as a workspace config whatever its file name.

        Referenced configs (``file:`` nodes) may use any YAML name.
        """
        key = str(path)
        cached = self._cache.get(key)
        if isinstance(cached, WorkspaceDocument):
            return cached.record
        record = load_config_record(key, self.fs)
        self._cache[key] = WorkspaceDocument(record)
        return record

    def save(self, path: PathLike, doc: Union[ConfigDocument, ConfigRecord]) -> None:
        key = str(path)
        if isinstance(doc, ConfigRecord):
            doc = WorkspaceDocument(doc)
        if isinstance(doc, WorkspaceDocument):
            save_config_record(key, doc.record, self.fs)
        else:
            self.fs.write_file(key, dump_yaml_string(doc.data).encode("utf-8"))
        self._cache[key] = doc
        logger.debug("Saved %s config %s", doc.kind, key)

    def invalidate(self, path: Optional[PathLike] = None) -> None:
        if path is None:
            self._cache.clear()
        else:
            self._cache.pop(str(path), None)


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
]
