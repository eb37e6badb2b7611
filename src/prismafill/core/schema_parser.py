"""
Prisma schema parser.

Extracts ``enum`` and ``model`` blocks from Prisma schema text and converts
them into IR (:class:`~prismafill.core.ir.PrismaSchema`).

Parsing is best-effort: blocks and lines that do not have the expected shape
are skipped (and logged at debug level), never raised. Blocks are located
with a brace-depth scanner that ignores braces inside ``//`` comments and
string literals, so a closing brace in a comment cannot end a block early.

Supported syntax::

    enum Role {
      USER
      ADMIN
    }

    model User {
      id        String   @id @default(auto()) @map("_id") @db.ObjectId
      email     String   @unique
      role      Role     @default(USER)
      tags      String[]
      nickname  String?
      createdAt DateTime @default(now())

      @@map("users")
    }
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from . import ir

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"(?:^|\s)(\w+)\s+(\w+)\s*$")
_FIELD_RE = re.compile(r"^(\w+)\s+(\w+(?:\[\])?)\??\s*(.*)$")
_MAP_RE = re.compile(r'^@@map\s*\(\s*"([^"]+)"\s*\)')
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")
_INT_RE = re.compile(r"^-?\d+$")
_DECIMAL_RE = re.compile(r"^-?\d+\.\d+$")
_ESCAPE_RE = re.compile(r"\\(.)")

_DEFAULT_PREFIX = "@default("


@dataclass
class Block:
    """A top-level ``keyword Name { body }`` block."""

    kind: str
    name: str
    body: str
    line: int


def scan_blocks(text: str) -> list[Block]:
    """
    Find all balanced top-level blocks in source order.

    The header (``keyword Name``) is the text between the previous top-level
    closer and the opening brace, with comments removed. A block that is
    never closed is dropped.
    """
    blocks: list[Block] = []
    depth = 0
    header_start = 0
    body_start = 0
    header: tuple[str, str] | None = None
    in_string = False
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if in_string:
            if ch == "\\":
                i += 2
                continue
            if ch == '"' or ch == "\n":
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "/" and text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
            continue
        elif ch == "{":
            if depth == 0:
                header_text = _LINE_COMMENT_RE.sub("", text[header_start:i])
                match = _HEADER_RE.search(header_text)
                header = (match.group(1), match.group(2)) if match else None
                body_start = i + 1
            depth += 1
        elif ch == "}":
            if depth == 0:
                # Stray closer; restart the header after it
                header_start = i + 1
            else:
                depth -= 1
                if depth == 0:
                    if header is not None:
                        kind, name = header
                        line = text.count("\n", 0, body_start) + 1
                        blocks.append(Block(kind, name, text[body_start:i], line))
                    header_start = i + 1
                    header = None
        i += 1

    if depth > 0 and header is not None:
        logger.debug("Dropping unterminated %s block %s", header[0], header[1])
    return blocks


def _split_top_level(text: str, is_separator: Callable[[str], bool]) -> list[str]:
    """Split on separator characters that sit outside parentheses, brackets and quotes."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    in_string = False
    escaped = False

    for ch in text:
        if in_string:
            current.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(depth - 1, 0)
        elif depth == 0 and is_separator(ch):
            if current:
                parts.append("".join(current))
                current = []
            continue
        current.append(ch)

    if current:
        parts.append("".join(current))
    return parts


def _strip_line_comment(line: str) -> str:
    """Remove a trailing ``//`` comment that is not inside a string literal."""
    in_string = False
    escaped = False
    for i, ch in enumerate(line):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "/" and line.startswith("//", i):
            return line[:i].rstrip()
    return line


def _block_lines(body: str) -> list[str]:
    lines = []
    for raw in body.split("\n"):
        line = _strip_line_comment(raw.strip())
        if line:
            lines.append(line)
    return lines


def resolve_default(payload: str) -> Any:
    """
    Convert an ``@default(...)`` payload to a Python literal.

    Returns ``None`` for function-style defaults such as ``now()``,
    ``auto()`` or ``uuid()``; the database generates those values itself.

    Examples:
        >>> resolve_default('"hello"')
        'hello'
        >>> resolve_default("42")
        42
        >>> resolve_default("3.14")
        3.14
        >>> resolve_default("ACTIVE")
        'ACTIVE'
        >>> resolve_default("now()") is None
        True
    """
    payload = payload.strip()
    if not payload:
        return None

    if len(payload) >= 2 and payload.startswith('"') and payload.endswith('"'):
        return _ESCAPE_RE.sub(r"\1", payload[1:-1])

    if payload == "true":
        return True
    if payload == "false":
        return False

    if _INT_RE.match(payload):
        return int(payload)
    if _DECIMAL_RE.match(payload):
        return float(payload)

    if "(" in payload:
        return None

    if payload.startswith("[") and payload.endswith("]"):
        items = [
            resolve_default(item)
            for item in _split_top_level(payload[1:-1], lambda ch: ch == ",")
        ]
        if any(item is None for item in items):
            return None
        return items

    # Enum member or other bare literal
    return payload


def parse_field_line(line: str) -> ir.FieldSpec | None:
    """
    Parse one field declaration line.

    Returns ``None`` when the line does not look like ``<name> <type> ...``.
    """
    match = _FIELD_RE.match(line)
    if not match:
        return None

    name, type_token, rest = match.groups()
    is_array = type_token.endswith("[]")
    field_type = type_token[:-2] if is_array else type_token

    attributes = [
        token for token in _split_top_level(rest, str.isspace) if token.startswith("@")
    ]

    default = None
    for attr in attributes:
        if attr.startswith(_DEFAULT_PREFIX) and attr.endswith(")"):
            default = resolve_default(attr[len(_DEFAULT_PREFIX) : -1])
            break

    return ir.FieldSpec(
        name=name,
        type=field_type,
        # A "?" anywhere on the line counts, not only right after the type
        is_optional="?" in line,
        is_array=is_array,
        default=default,
        is_id=any(attr.startswith("@id") for attr in attributes),
        is_unique=any(attr.startswith("@unique") for attr in attributes),
        attributes=attributes,
    )


def parse_enum_block(block: Block) -> ir.EnumSpec:
    """Build an enum from a block body; each line contributes its leading labels."""
    values: list[str] = []
    for line in _block_lines(block.body):
        for token in line.replace(",", " ").split():
            if token.startswith("@"):
                break
            if token not in values:
                values.append(token)
    return ir.EnumSpec(name=block.name, values=values)


def parse_model_block(block: Block) -> ir.ModelSpec:
    """Build a model from a block body."""
    fields: list[ir.FieldSpec] = []
    seen: set[str] = set()
    map_name: str | None = None

    for line in _block_lines(block.body):
        if line.startswith("@@"):
            map_match = _MAP_RE.match(line)
            if map_match and map_name is None:
                map_name = map_match.group(1)
            continue

        field = parse_field_line(line)
        if field is None:
            logger.debug("Skipping unrecognised line in model %s: %r", block.name, line)
            continue
        if field.name in seen:
            logger.debug("Skipping duplicate field %s.%s", block.name, field.name)
            continue
        seen.add(field.name)
        fields.append(field)

    return ir.ModelSpec(name=block.name, fields=fields, map_name=map_name)


class SchemaParser:
    """
    Parser for Prisma schema text.

    Example:
        parser = SchemaParser(schema_text)
        schema = parser.parse()
        parser.is_enum("Role")  # True
    """

    def __init__(self, schema_content: str):
        """
        Initialize parser.

        Args:
            schema_content: Raw schema text, possibly several files concatenated
        """
        self.schema_content = schema_content
        self.schema: ir.PrismaSchema | None = None

    def parse(self) -> ir.PrismaSchema:
        """Parse all enum and model blocks."""
        enums: list[ir.EnumSpec] = []
        models: list[ir.ModelSpec] = []
        enum_names: set[str] = set()
        model_names: set[str] = set()

        for block in scan_blocks(self.schema_content):
            if block.kind == "enum":
                if block.name in enum_names:
                    logger.debug("Skipping duplicate enum %s (line %d)", block.name, block.line)
                    continue
                enum_names.add(block.name)
                enums.append(parse_enum_block(block))
            elif block.kind == "model":
                if block.name in model_names:
                    logger.debug("Skipping duplicate model %s (line %d)", block.name, block.line)
                    continue
                model_names.add(block.name)
                models.append(parse_model_block(block))
            else:
                logger.debug("Ignoring %s block %s", block.kind, block.name)

        self.schema = ir.PrismaSchema(models=models, enums=enums)
        return self.schema

    def is_enum(self, type_name: str) -> bool:
        """Check if a type name is a parsed enum (False before :meth:`parse`)."""
        return self.schema is not None and self.schema.is_enum(type_name)

    def is_model(self, type_name: str) -> bool:
        """Check if a type name is a parsed model (False before :meth:`parse`)."""
        return self.schema is not None and self.schema.is_model(type_name)


def parse_schema(schema_content: str) -> ir.PrismaSchema:
    """Parse Prisma schema text into a :class:`~prismafill.core.ir.PrismaSchema`."""
    return SchemaParser(schema_content).parse()
