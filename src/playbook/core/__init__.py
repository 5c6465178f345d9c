"""Core logic for playbook.

This package contains the document pipeline:
- document_parser: Text to Document, failing fast on the first defect
- document_validator: Collect-all semantic and referential checks
- checker: File-level parse + validate, target resolution and discovery
"""

from .checker import CheckResult, check_file, check_text, discover_playbooks, resolve_target
from .document_parser import ParserState, parse_document, parse_inline_list, unquote
from .document_validator import validate_document

__all__ = [
    "CheckResult",
    "ParserState",
    "check_file",
    "check_text",
    "discover_playbooks",
    "parse_document",
    "parse_inline_list",
    "resolve_target",
    "unquote",
    "validate_document",
]
