"""Playbook: parser and validator for playbook workflow documents."""

from .core import check_file, check_text, parse_document, validate_document
from .errors import (
    PlaybookError,
    PlaybookParseError,
    PlaybookReferenceError,
    PlaybookSchemaError,
    PlaybookSyntaxError,
)
from .models import Argument, Document, Step

__version__ = "0.1.0"

__all__ = [
    "Argument",
    "Document",
    "PlaybookError",
    "PlaybookParseError",
    "PlaybookReferenceError",
    "PlaybookSchemaError",
    "PlaybookSyntaxError",
    "Step",
    "__version__",
    "check_file",
    "check_text",
    "parse_document",
    "validate_document",
]
