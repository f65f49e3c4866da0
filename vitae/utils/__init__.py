"""
Shared utilities for VITAE.

Common functionality used across contexts:
- Tolerant JSON decoding and document I/O
- Text normalization and slugs
- PDF inspection
- Timestamps and logging setup
"""

from vitae.utils.json_tools import coerce_json_list, decode_json, load_json_document
from vitae.utils.timestamp import now, now_exact, today

__all__ = ["coerce_json_list", "decode_json", "load_json_document", "now", "now_exact", "today"]
