"""Best-effort Prisma schema importer.

Reads ``model`` blocks into tables. Other blocks (``enum``, ``generator``,
``datasource``, ``type``, ``view``) are skipped. Relations between models
are not reconstructed: relation fields are left out and no Relationship is
created.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple
from schemaviz.importers.layout import TableLayout
from schemaviz.ir.schema import Schema, Table, TableField
from schemaviz.ir.types import ColumnType, PRECISION_TYPES, SIZED_TYPES
from schemaviz.utils.naming import to_snake_case
from schemaviz.config.settings import get_settings
from schemaviz.config.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SCHEMA_NAME = "Imported from Prisma"

PRISMA_SCALARS: Dict[str, ColumnType] = {
    "String": ColumnType.VARCHAR,
    "Int": ColumnType.INTEGER,
    "BigInt": ColumnType.BIGINT,
    "Float": ColumnType.REAL,
    "Decimal": ColumnType.DECIMAL,
    "Boolean": ColumnType.BOOLEAN,
    "DateTime": ColumnType.TIMESTAMP,
    "Json": ColumnType.JSON,
    "Bytes": ColumnType.BYTEA,
}

# @db.<Native> attributes that pin down the database type
NATIVE_TYPES: Dict[str, ColumnType] = {
    "Uuid": ColumnType.UUID,
    "Text": ColumnType.TEXT,
    "VarChar": ColumnType.VARCHAR,
    "Char": ColumnType.CHARACTER,
    "Xml": ColumnType.XML,
    "Inet": ColumnType.INET,
    "SmallInt": ColumnType.SMALLINT,
    "Integer": ColumnType.INTEGER,
    "Real": ColumnType.REAL,
    "DoublePrecision": ColumnType.DOUBLE_PRECISION,
    "Decimal": ColumnType.DECIMAL,
    "Money": ColumnType.MONEY,
    "Timestamp": ColumnType.TIMESTAMP,
    "Timestamptz": ColumnType.TIMESTAMPTZ,
    "Date": ColumnType.DATE,
    "Time": ColumnType.TIME,
    "Timetz": ColumnType.TIMETZ,
    "Json": ColumnType.JSON,
    "JsonB": ColumnType.JSONB,
    "ByteA": ColumnType.BYTEA,
    "Bit": ColumnType.BIT,
    "VarBit": ColumnType.BIT_VARYING,
}

_SKIPPED_BLOCKS = ("enum", "generator", "datasource", "type", "view")

_TOKEN_RE = re.compile(
    r"""
    (?P<comment>//[^\n]*)
  | (?P<newline>\n)
  | (?P<space>[ \t\r\f\v]+)
  | (?P<string>"(?:[^"\\\n]|\\.)*"?)
  | (?P<number>-?\d+(?:\.\d+)?)
  | (?P<word>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<attr>@@?)
  | (?P<punct>[{}()\[\]?,.=:])
  | (?P<other>\S)
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class PrismaToken:
    kind: str  # newline | string | number | word | attr | punct | other
    value: str
    start: int
    end: int

    def is_punct(self, char: str) -> bool:
        return self.kind == "punct" and self.value == char


def tokenize(text: str) -> List[PrismaToken]:
    """Tokenize Prisma schema text, keeping newlines (they end field lines)."""
    tokens = []
    for match in _TOKEN_RE.finditer(text):
        if match.lastgroup in ("comment", "space"):
            continue
        tokens.append(PrismaToken(match.lastgroup, match.group(), match.start(), match.end()))
    return tokens


def _unquote(raw: str) -> str:
    body = raw[1:-1] if len(raw) >= 2 and raw.endswith('"') else raw[1:]
    return re.sub(r"\\(.)", r"\1", body)


@dataclass
class _Attribute:
    name: str  # "id", "default", "db.VarChar", ...
    args: List[PrismaToken]


class PrismaParser:
    """Block and line reader for Prisma schema files."""

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)

    def source(self, tokens: List[PrismaToken]) -> str:
        if not tokens:
            return ""
        return self.text[tokens[0].start:tokens[-1].end]

    def blocks(self) -> List[Tuple[str, str, List[PrismaToken]]]:
        """Return ``(keyword, name, body tokens)`` for every top-level block."""
        found = []
        tokens = self.tokens
        pos = 0
        while pos < len(tokens):
            if (
                tokens[pos].kind == "word"
                and pos + 2 < len(tokens)
                and tokens[pos + 1].kind == "word"
                and tokens[pos + 2].is_punct("{")
            ):
                keyword, name = tokens[pos].value, tokens[pos + 1].value
                body, pos = self._braced(pos + 3)
                found.append((keyword, name, body))
            else:
                pos += 1
        return found

    def _braced(self, pos: int) -> Tuple[List[PrismaToken], int]:
        """Collect tokens up to the brace closing a block opened just before ``pos``."""
        depth = 1
        body = []
        while pos < len(self.tokens):
            token = self.tokens[pos]
            pos += 1
            if token.is_punct("{"):
                depth += 1
            elif token.is_punct("}"):
                depth -= 1
                if depth == 0:
                    break
            body.append(token)
        return body, pos

    def _group(self, line: List[PrismaToken], pos: int) -> Tuple[List[PrismaToken], int]:
        """Read a parenthesized argument list starting at ``line[pos]`` == '('."""
        depth = 0
        inner = []
        while pos < len(line):
            token = line[pos]
            pos += 1
            if token.is_punct("("):
                depth += 1
                if depth == 1:
                    continue
            elif token.is_punct(")"):
                depth -= 1
                if depth == 0:
                    break
            inner.append(token)
        return inner, pos

    def attributes(self, line: List[PrismaToken], pos: int) -> List[_Attribute]:
        """Read ``@name(.name)*[(args)]`` attributes from ``line[pos:]``."""
        found = []
        while pos < len(line):
            token = line[pos]
            pos += 1
            if token.kind != "attr" or token.value != "@":
                continue
            if pos >= len(line) or line[pos].kind != "word":
                continue
            name = line[pos].value
            pos += 1
            while pos + 1 < len(line) and line[pos].is_punct(".") and line[pos + 1].kind == "word":
                name += "." + line[pos + 1].value
                pos += 2
            args: List[PrismaToken] = []
            if pos < len(line) and line[pos].is_punct("("):
                args, pos = self._group(line, pos)
            found.append(_Attribute(name, args))
        return found

    def default_value(self, args: List[PrismaToken]) -> Tuple[Optional[str], bool]:
        """Translate ``@default(...)`` arguments into ``(default value, autoincrement)``."""
        text = self.source(args).strip()
        if text == "autoincrement()":
            return None, True
        if text == "now()":
            return "CURRENT_TIMESTAMP", False
        if text == "uuid()":
            return "uuid_generate_v4()", False
        if len(args) == 1 and args[0].kind == "string":
            return _unquote(args[0].value), False
        return text.replace('"', "").replace("'", "") or None, False

    def field(self, line: List[PrismaToken], model: str, relation_types: Set[str]) -> Optional[TableField]:
        if len(line) < 2 or line[0].kind != "word" or line[1].kind != "word":
            return None
        name, type_name = line[0].value, line[1].value
        pos = 2
        if pos + 1 < len(line) and line[pos].is_punct("[") and line[pos + 1].is_punct("]"):
            pos += 2
        optional = pos < len(line) and line[pos].is_punct("?")
        if optional:
            pos += 1

        if type_name in relation_types:
            logger.debug(f"{model}.{name}: relation field to {type_name}, skipped")
            return None

        column_type = PRISMA_SCALARS.get(type_name)
        if column_type is None:
            logger.debug(f"{model}.{name}: non-scalar type {type_name}, using varchar")
            column_type = ColumnType.VARCHAR

        f = TableField(name=name, type=column_type, nullable=optional)
        for attribute in self.attributes(line, pos):
            if attribute.name == "id":
                f.primary_key = True
                f.nullable = False
                f.unique = True
            elif attribute.name == "unique":
                f.unique = True
            elif attribute.name == "default":
                f.default_value, auto = self.default_value(attribute.args)
                f.auto_increment = f.auto_increment or auto
            elif attribute.name.startswith("db."):
                self._native_type(f, attribute)
        return f

    def _native_type(self, f: TableField, attribute: _Attribute) -> None:
        native = NATIVE_TYPES.get(attribute.name[3:])
        if native is None:
            return
        f.type = native
        numbers = [int(float(t.value)) for t in attribute.args if t.kind == "number"]
        if numbers and native in SIZED_TYPES:
            f.length = numbers[0]
        elif numbers and native in PRECISION_TYPES:
            f.precision = numbers[0]
            f.scale = numbers[1] if len(numbers) > 1 else None

    def model(self, name: str, body: List[PrismaToken], relation_types: Set[str]) -> List[TableField]:
        fields = []
        line: List[PrismaToken] = []
        for token in body + [PrismaToken("newline", "\n", -1, -1)]:
            if token.kind != "newline":
                line.append(token)
                continue
            # @@ lines are model-level directives
            if line and not (line[0].kind == "attr" and line[0].value == "@@"):
                f = self.field(line, name, relation_types)
                if f is not None:
                    fields.append(f)
            line = []
        return fields


def import_prisma(
    text: str,
    name: Optional[str] = None,
    layout: Optional[TableLayout] = None,
) -> Schema:
    """
    Recover a schema from a Prisma schema file.

    Each ``model`` becomes a table named after the model in snake_case. A
    ``?`` suffix makes a field nullable; ``@id``, ``@unique`` and
    ``@default(autoincrement())`` set the matching flags, other ``@default``
    payloads become the default value (``now()`` -> ``CURRENT_TIMESTAMP``,
    ``uuid()`` -> ``uuid_generate_v4()``, literals unquoted). No
    relationships are created.

    Args:
        text: Prisma schema source
        name: Schema name
        layout: Placement for the imported tables (defaults to settings)

    Returns:
        New Schema instance
    """
    parser = PrismaParser(text)
    blocks = parser.blocks()
    relation_types = {block_name for keyword, block_name, _ in blocks if keyword in ("model", "type")}
    layout = layout or TableLayout.from_settings()
    color = get_settings().default_table_color

    tables = []
    for keyword, model_name, body in blocks:
        if keyword != "model":
            if keyword not in _SKIPPED_BLOCKS:
                logger.debug(f"Skipping unknown Prisma block '{keyword} {model_name}'")
            continue
        tables.append(
            Table(
                name=to_snake_case(model_name),
                fields=parser.model(model_name, body, relation_types),
                position=layout.position_for(len(tables)),
                color=color,
            )
        )

    schema = Schema(
        name=name or DEFAULT_SCHEMA_NAME,
        description="Schema imported from Prisma file",
        tables=tables,
    )
    logger.info(f"Imported {len(tables)} model(s) from Prisma")
    return schema
