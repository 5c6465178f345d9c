"""Playbook document parsing.

Playbooks use a small, fixed subset of YAML: top-level scalars, a block list
of argument mappings and a block list of step mappings whose list fields may
be written inline (``[a, b]``) or as nested ``- item`` lines. The parser is a
single pass over physical lines driven by a state machine, and raises on the
first defect with the offending line number.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..constants import SLUG_PATTERN, SLUG_PATTERN_TEXT
from ..errors import PlaybookReferenceError, PlaybookSchemaError, PlaybookSyntaxError
from ..models import FIELD_VOCABULARIES, LIST_FIELDS, Argument, Document, Step, allowed, values

logger = logging.getLogger(__name__)

_KEY_VALUE = re.compile(r"^( *)([a-zA-Z_][a-zA-Z0-9_-]*):\s*(.*?)\s*$")
_LIST_ITEM = re.compile(r"^( *)-(?:\s+(.*?))?\s*$")

_EMPTY_INLINE_LIST = ("[]", "[ ]")
_TOP_LEVEL_SCALARS = ("name", "description", "version")
_ARG_REQUIRED = ("name", "description", "required")
_STEP_REQUIRED = ("id", "command", "autonomy", "error_policy")
_STEP_SCALARS = ("command", "args", "parallel_group")


class ParserState(Enum):
    """Parser contexts."""

    TOP = "top"
    ARGS_LIST = "args-list"
    ARGS_ITEM = "args-item"
    STEPS_LIST = "steps-list"
    STEPS_ITEM = "steps-item"


@dataclass
class _Line:
    number: int
    text: str

    @property
    def indent(self) -> int:
        return len(self.text) - len(self.text.lstrip(" "))

    @property
    def content(self) -> str:
        return self.text.strip()


@dataclass
class _Item:
    """An argument or step being assembled from its ``- ...`` block."""

    dash_indent: int
    line: int
    fields: dict[str, Any] = field(default_factory=dict)
    field_lines: dict[str, int] = field(default_factory=dict)


@dataclass
class _BlockList:
    """A list field whose items follow on ``- item`` lines.

    ``indent`` is unset until the first item is seen; that item fixes it
    for the rest of the block.
    """

    field: str
    indent: int | None = None


def unquote(raw: str) -> str:
    """Strip one pair of matching wrapping quotes from a scalar.

    No escape processing is done: ``"a\\nb"`` becomes ``a\\nb``.
    """
    s = raw.strip()
    if len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"'):
        return s[1:-1]
    return s


def parse_inline_list(raw: str, line: int | None = None) -> list[str]:
    """Parse inline list syntax: ``[a, "b, c", 'd']`` -> ``["a", "b, c", "d"]``.

    Quoted items may contain commas.

    Raises:
        PlaybookSyntaxError: If brackets or quotes are unbalanced
    """
    s = raw.strip()
    if not (s.startswith("[") and s.endswith("]")):
        raise PlaybookSyntaxError(f"expected inline list syntax [a, b, ...], got: {raw}", line=line)
    inner = s[1:-1].strip()
    if not inner:
        return []

    items: list[str] = []
    current: list[str] = []
    quote: str | None = None
    for ch in inner:
        if quote:
            if ch == quote:
                quote = None
            else:
                current.append(ch)
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ",":
            items.append("".join(current).strip())
            current = []
        else:
            current.append(ch)

    if quote:
        raise PlaybookSyntaxError(f"unterminated quote in inline list: {raw}", line=line)
    tail = "".join(current).strip()
    if tail:
        items.append(tail)
    return items


def _check_vocabulary(key: str, value: str, line: int) -> None:
    vocab, label = FIELD_VOCABULARIES[key]
    if value not in values(vocab):
        raise PlaybookSchemaError(
            f'{label} "{value}" is not valid (allowed: {allowed(vocab)})',
            line=line,
            field=key,
            allowed=values(vocab),
        )


class _DocumentParser:
    """Single-use parser holding the state of one pass over a document."""

    def __init__(self, text: str) -> None:
        self.lines = [line.removesuffix("\r") for line in text.split("\n")]
        self.state = ParserState.TOP
        self.fields: dict[str, str] = {}
        self.args: list[Argument] = []
        self.steps: list[Step] = []
        self.seen_ids: set[str] = set()
        self.item: _Item | None = None
        self.block: _BlockList | None = None
        self.handlers: dict[ParserState, Callable[[_Line], bool]] = {
            ParserState.TOP: self._top,
            ParserState.ARGS_LIST: self._list,
            ParserState.ARGS_ITEM: self._item,
            ParserState.STEPS_LIST: self._list,
            ParserState.STEPS_ITEM: self._item,
        }

    def parse(self) -> Document:
        index = 0
        while index < len(self.lines):
            line = _Line(index + 1, self.lines[index])
            if not line.content or line.content.startswith("#"):
                index += 1
                continue
            leading = line.text[: len(line.text) - len(line.text.lstrip())]
            if "\t" in leading:
                raise PlaybookSyntaxError(
                    f"tab characters are not allowed in indentation: {line.content}",
                    line=line.number,
                )
            # A handler that does not consume the line has switched state;
            # the same line is processed again in the new state.
            if self.handlers[self.state](line):
                index += 1

        if self.item is not None:
            self._flush_item()
        return self._finish()

    # -- State handlers -------------------------------------------------

    def _top(self, line: _Line) -> bool:
        kv = _KEY_VALUE.match(line.text)
        if kv is None:
            raise PlaybookSyntaxError(
                f"unexpected content at top level: {line.content}", line=line.number
            )
        if line.indent != 0:
            raise PlaybookSyntaxError(
                f"unexpected indentation at top level: {line.content}", line=line.number
            )

        key, raw = kv.group(2), kv.group(3)
        if key in _TOP_LEVEL_SCALARS:
            value = unquote(raw)
            if key == "name" and value and not SLUG_PATTERN.match(value):
                raise PlaybookSchemaError(
                    f'name "{value}" must match pattern {SLUG_PATTERN_TEXT}',
                    line=line.number,
                    field="name",
                )
            self.fields[key] = value
        elif key in ("args", "steps"):
            if raw in _EMPTY_INLINE_LIST:
                pass
            elif raw == "":
                self.state = ParserState.ARGS_LIST if key == "args" else ParserState.STEPS_LIST
            else:
                raise PlaybookSyntaxError(
                    f'"{key}" must be an empty inline list [] or a block list',
                    line=line.number,
                    field=key,
                )
        else:
            raise PlaybookSchemaError(
                f'unknown top-level field "{key}"', line=line.number, field=key
            )
        return True

    def _list(self, line: _Line) -> bool:
        match = _LIST_ITEM.match(line.text)
        if match:
            self.state = (
                ParserState.ARGS_ITEM
                if self.state is ParserState.ARGS_LIST
                else ParserState.STEPS_ITEM
            )
            self._open_item(line, match)
            return True
        if self._ends_section(line):
            self.state = ParserState.TOP
            return False
        section = "args" if self.state is ParserState.ARGS_LIST else "steps"
        raise PlaybookSyntaxError(
            f"unexpected content in {section} section: {line.content}", line=line.number
        )

    def _item(self, line: _Line) -> bool:
        assert self.item is not None
        if self.block is not None and self._extend_block(line):
            return True

        match = _LIST_ITEM.match(line.text)
        if match and line.indent == self.item.dash_indent:
            self._flush_item()
            self._open_item(line, match)
            return True

        if self._ends_section(line):
            self._flush_item()
            self.state = ParserState.TOP
            return False

        kind = "args" if self.state is ParserState.ARGS_ITEM else "step"
        if _KEY_VALUE.match(line.text):
            if line.indent <= self.item.dash_indent:
                raise PlaybookSyntaxError(
                    f"unexpected indentation in {kind} item: {line.content}", line=line.number
                )
            self._apply_field(line, line.content)
            return True

        raise PlaybookSyntaxError(
            f"unexpected content in {kind} item: {line.content}", line=line.number
        )

    # -- Items ----------------------------------------------------------

    def _ends_section(self, line: _Line) -> bool:
        return line.indent == 0 and _KEY_VALUE.match(line.text) is not None

    def _open_item(self, line: _Line, match: re.Match[str]) -> None:
        self.item = _Item(dash_indent=line.indent, line=line.number)
        self.block = None
        content = match.group(2)
        if content:
            self._apply_field(line, content)

    def _apply_field(self, line: _Line, text: str) -> None:
        kv = _KEY_VALUE.match(text)
        kind = "arg" if self.state is ParserState.ARGS_ITEM else "step"
        if kv is None:
            raise PlaybookSyntaxError(f"cannot parse {kind} field: {text}", line=line.number)
        assert self.item is not None
        key, raw = kv.group(2), kv.group(3)
        self.item.field_lines[key] = line.number
        if kind == "arg":
            self._apply_arg_field(line, key, raw)
        else:
            self._apply_step_field(line, key, raw)

    def _apply_arg_field(self, line: _Line, key: str, raw: str) -> None:
        assert self.item is not None
        value = unquote(raw)
        if key in ("name", "description"):
            self.item.fields[key] = value
        elif key == "required":
            if value not in ("true", "false"):
                raise PlaybookSchemaError(
                    f'arg "required" must be true or false, got: {value}',
                    line=line.number,
                    field="required",
                    allowed=("true", "false"),
                )
            self.item.fields["required"] = value == "true"
        else:
            raise PlaybookSchemaError(f'unknown arg field "{key}"', line=line.number, field=key)

    def _apply_step_field(self, line: _Line, key: str, raw: str) -> None:
        assert self.item is not None
        fields = self.item.fields

        if key in LIST_FIELDS:
            if raw.startswith("["):
                items = parse_inline_list(raw, line.number)
                for value in items:
                    _check_vocabulary(key, value, line.number)
                fields[key] = items
            elif raw == "":
                fields[key] = []
                self.block = _BlockList(key)
            else:
                raise PlaybookSyntaxError(
                    f'field "{key}" must be a list (inline [a, b] or block "- item")',
                    line=line.number,
                    field=key,
                )
            return

        value = unquote(raw)
        if key == "id":
            if not SLUG_PATTERN.match(value):
                raise PlaybookSchemaError(
                    f'step id "{value}" must match pattern {SLUG_PATTERN_TEXT}',
                    line=line.number,
                    field="id",
                )
            fields["id"] = value
        elif key in _STEP_SCALARS:
            fields[key] = value
        elif key == "model":
            if value:
                _check_vocabulary(key, value, line.number)
            fields["model"] = value or None
        elif key in FIELD_VOCABULARIES:
            _check_vocabulary(key, value, line.number)
            fields[key] = value
        else:
            raise PlaybookSchemaError(f'unknown step field "{key}"', line=line.number, field=key)

    def _extend_block(self, line: _Line) -> bool:
        """Append a ``- item`` line to the open block list, if it belongs there."""
        assert self.item is not None and self.block is not None
        match = _LIST_ITEM.match(line.text)
        if match:
            if self.block.indent is None and line.indent > self.item.dash_indent:
                self.block.indent = line.indent
            if line.indent == self.block.indent:
                value = unquote(match.group(2) or "")
                _check_vocabulary(self.block.field, value, line.number)
                self.item.fields[self.block.field].append(value)
                return True
        self.block = None
        return False

    def _flush_item(self) -> None:
        item, self.item, self.block = self.item, None, None
        assert item is not None
        if self.state is ParserState.ARGS_ITEM:
            self.args.append(self._build_argument(item))
        else:
            self.steps.append(self._build_step(item))

    def _build_argument(self, item: _Item) -> Argument:
        index = len(self.args) + 1
        name = item.fields.get("name")
        ref = f'args[{index}] "{name}"' if name else f"args[{index}]"
        for key in _ARG_REQUIRED:
            if item.fields.get(key) in (None, ""):
                raise PlaybookSchemaError(
                    f'{ref}: missing required field "{key}"', line=item.line, field=key
                )
        return Argument(**item.fields)

    def _build_step(self, item: _Item) -> Step:
        index = len(self.steps) + 1
        step_id = item.fields.get("id")
        if step_id:
            ref = f'step "{step_id}"'
        elif item.fields.get("command"):
            ref = f'steps[{index}] (command "{item.fields["command"]}")'
        else:
            ref = f"steps[{index}]"
        for key in _STEP_REQUIRED:
            if not item.fields.get(key):
                raise PlaybookSchemaError(
                    f'{ref}: missing required field "{key}"', line=item.line, field=key
                )
        if step_id in self.seen_ids:
            raise PlaybookReferenceError(
                f'step id "{step_id}" is not unique',
                line=item.field_lines.get("id", item.line),
                field="id",
            )
        self.seen_ids.add(step_id)
        return Step(**item.fields)

    def _finish(self) -> Document:
        for key in _TOP_LEVEL_SCALARS:
            if not self.fields.get(key):
                raise PlaybookSchemaError(f'missing required top-level field "{key}"', field=key)
        if not self.steps:
            raise PlaybookSchemaError("Playbook must define at least one step", field="steps")

        document = Document(**self.fields, args=self.args, steps=self.steps)
        logger.debug(
            f"Parsed playbook {document.name}: {len(self.args)} args, {len(self.steps)} steps"
        )
        return document


def parse_document(text: str) -> Document:
    """Parse playbook text into a Document.

    Args:
        text: Raw playbook content

    Returns:
        The parsed, immutable document

    Raises:
        PlaybookSyntaxError: On malformed lines, indentation or inline lists,
            or when ``text`` is not a string
        PlaybookSchemaError: On unknown or missing fields, invalid enum values,
            slug mismatches, or when no step is defined
        PlaybookReferenceError: When two steps share an id
    """
    if not isinstance(text, str):
        raise PlaybookSyntaxError("document content must be a string")
    return _DocumentParser(text).parse()
