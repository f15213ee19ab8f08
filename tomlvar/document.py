from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import IO, Any, Dict, Iterator

from .exceptions import DocumentError
from .utils import split_path

# TOML support:
# - Python >= 3.11: stdlib `tomllib`
# - Older: `tomli` (installed through the package metadata)
tomllib: Any
try:
    import tomllib as _tomllib
    tomllib = _tomllib
except ImportError:  # pragma: no cover
    import tomli as _tomli
    tomllib = _tomli

# Optional YAML support (PyYAML)
yaml: Any | None
try:
    import yaml as _yaml
    yaml = _yaml
except ImportError:  # pragma: no cover
    yaml = None

logger = logging.getLogger(__name__)

FORMATS = ("toml", "json", "yaml")

_SUFFIX_FORMATS = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


class Document(Mapping[str, Any]):
    """
    Read-only parsed configuration document.

    Provides mapping access (doc["section"]["key"]), attribute-style
    access (doc.section.key) and dotted path lookup
    (doc.lookup("section.key")).
    """

    def __init__(self, data: Mapping[str, Any]):
        self._data: Dict[str, Any] = dict(data)

    def __getitem__(self, key: str) -> Any:
        return _wrap_nested(self._data[key])

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            value = self._data[name]
        except KeyError as exc:
            raise AttributeError(name) from exc
        return _wrap_nested(value)

    def lookup(self, path: str) -> Any:
        """
        Return the value stored at a dotted path, or None if it is absent.

        Tables come back as plain dicts. Traversing through a non-table
        value counts as absent.
        """
        node: Any = self._data
        for key in split_path(path):
            if not isinstance(node, Mapping) or key not in node:
                return None
            node = node[key]
        return node

    def __repr__(self) -> str:
        # Avoid dumping potentially huge or sensitive configs verbosely
        keys_preview = ", ".join(list(self._data.keys())[:5])
        more = "..." if len(self._data) > 5 else ""
        return f"<Document keys=[{keys_preview}{more}]>"


def _wrap_nested(value: Any) -> Any:
    """
    Wrap nested mappings in Document so attribute access works recursively.
    """
    if isinstance(value, Mapping) and not isinstance(value, Document):
        return Document(value)
    return value


def parse_document(content: str, *, format: str = "toml") -> Document:
    """
    Parse document text.

    :param content: Source text.
    :param format: One of "toml", "json" or "yaml".
    :raises DocumentError: on malformed input or an unknown format.
    """
    if format == "toml":
        data = _parse_toml(content)
    elif format == "json":
        data = _parse_json(content)
    elif format == "yaml":
        data = _parse_yaml(content)
    else:
        raise DocumentError(
            f"Unsupported document format {format!r} (expected one of {', '.join(FORMATS)})"
        )
    return Document(data)


def parse_document_file(path: str | Path) -> Document:
    """
    Read and parse a document file.

    The format is chosen by extension: .json, .yaml/.yml, anything else
    is read as TOML.
    """
    path = Path(path).expanduser()
    format = _SUFFIX_FORMATS.get(path.suffix.lower(), "toml")

    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read()
    except OSError as exc:
        raise DocumentError(f"Could not read document {str(path)!r}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise DocumentError(f"Document {str(path)!r} is not valid UTF-8: {exc}") from exc

    logger.debug("Parsing %s document from %s", format, path)
    return parse_document(content, format=format)


def parse_document_stream(reader: IO[Any], *, format: str = "toml") -> Document:
    """Read a text or binary stream to the end and parse it."""
    try:
        content = reader.read()
    except OSError as exc:
        raise DocumentError(f"Could not read document stream: {exc}") from exc

    if isinstance(content, (bytes, bytearray)):
        try:
            content = bytes(content).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DocumentError(f"Document stream is not valid UTF-8: {exc}") from exc
    return parse_document(content, format=format)


def _parse_toml(content: str) -> Mapping[str, Any]:
    try:
        return tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        raise DocumentError(str(exc)) from exc


def _parse_json(content: str) -> Mapping[str, Any]:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise DocumentError(str(exc)) from exc
    return _require_mapping(data, "JSON")


def _parse_yaml(content: str) -> Mapping[str, Any]:
    if yaml is None:
        raise DocumentError(
            "YAML document requested but 'PyYAML' is not installed."
        )
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise DocumentError(str(exc)) from exc

    if data is None:
        return {}
    return _require_mapping(data, "YAML")


def _require_mapping(data: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise DocumentError(f"Top-level {kind} structure must be a mapping.")
    return data
