"""
Tolerant JSON decoding for externally produced documents.

Every place where JSON from outside the system enters VITAE (template import,
AI-export validation, record fields stored as JSON strings) goes through these
helpers so that decode failures become typed "no value" results instead of
exceptions. Only load_json_document() raises, because it sits at the file I/O
boundary where the caller must report the failure.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from vitae.utils.exceptions import MalformedDocumentError
from vitae.utils.files import write_text_atomic

_UNDECODABLE = object()


def _decode(text: str) -> Any:
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return _UNDECODABLE


def decode_json(text: Any, default: Any = None) -> Optional[Any]:
    """
    Decode a JSON string, returning default when it cannot be decoded.

    Non-string input is returned as default as well. The literal "null"
    decodes to None, so callers that must tell the two apart pass their own
    sentinel as default.

    Example:
        >>> decode_json('["a", "b"]')
        ['a', 'b']
        >>> decode_json("{oops") is None
        True
    """
    if not isinstance(text, (str, bytes, bytearray)):
        return default
    value = _decode(text)
    return default if value is _UNDECODABLE else value


def coerce_json_list(value: Any) -> List[Any]:
    """
    Resolve a value that may be a native list or a JSON-encoded list.

    Strings are decoded; anything that is not a list after decoding becomes
    an empty list. Never raises.

    Example:
        >>> coerce_json_list('["Leadership", "Python"]')
        ['Leadership', 'Python']
        >>> coerce_json_list('not json')
        []
        >>> coerce_json_list(None)
        []
    """
    if isinstance(value, str):
        value = decode_json(value)
    return list(value) if isinstance(value, list) else []


def is_record(value: Any) -> bool:
    """True for JSON objects (decoded as dicts)."""
    return isinstance(value, dict)


def as_record(value: Any) -> Dict[str, Any]:
    """Return value if it is a JSON object, else an empty dict."""
    return value if isinstance(value, dict) else {}


def optional_str(value: Any) -> Optional[str]:
    """Return value if it is a string, else None."""
    return value if isinstance(value, str) else None


def load_json_document(path: Path) -> Any:
    """
    Read and decode a JSON document from disk.

    Raises:
        MalformedDocumentError: If the file cannot be read or is not valid JSON
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedDocumentError(f"Could not read JSON document: {e}", source_path=path) from e

    value = _decode(text)
    if value is _UNDECODABLE:
        raise MalformedDocumentError("File is not valid JSON", source_path=path, snippet=text)
    return value


def dump_json(data: Any) -> str:
    """Serialize data the way all VITAE exports are written (2-space indent, UTF-8)."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json_document(data: Any, path: Path) -> Path:
    """Write data as a JSON export file, atomically."""
    return write_text_atomic(Path(path), dump_json(data))
