"""Best-effort SQL DDL importer.

The text is tokenized, split into statements, and each statement is read
by a small recursive-descent parser that understands just enough DDL to
recover tables, columns and single-column foreign keys. Anything it does
not understand is skipped; the importer never raises on malformed input.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from schemaviz.importers.layout import TableLayout
from schemaviz.importers.sql_lexer import Token, TokenKind, split_top_level, tokenize
from schemaviz.ir.schema import Relationship, Schema, Table, TableField
from schemaviz.ir.types import ColumnType, PRECISION_TYPES, SIZED_TYPES
from schemaviz.config.settings import get_settings
from schemaviz.config.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SCHEMA_NAME = "Imported Schema"

# Spellings from other dialects mapped onto canonical types
SQL_TYPE_ALIASES: Dict[str, ColumnType] = {
    "char": ColumnType.CHARACTER,
    "int2": ColumnType.SMALLINT,
    "int4": ColumnType.INTEGER,
    "int8": ColumnType.BIGINT,
    "tinyint": ColumnType.SMALLINT,
    "mediumint": ColumnType.INTEGER,
    "double": ColumnType.DOUBLE_PRECISION,
    "float4": ColumnType.REAL,
    "float8": ColumnType.DOUBLE_PRECISION,
    "bool": ColumnType.BOOLEAN,
    "datetime": ColumnType.TIMESTAMP,
    "timestamp with time zone": ColumnType.TIMESTAMPTZ,
    "timestamp without time zone": ColumnType.TIMESTAMP,
    "time with time zone": ColumnType.TIMETZ,
    "time without time zone": ColumnType.TIME,
    "tinytext": ColumnType.TEXT,
    "mediumtext": ColumnType.TEXT,
    "longtext": ColumnType.TEXT,
    "blob": ColumnType.BYTEA,
    "longblob": ColumnType.BYTEA,
    "binary": ColumnType.BYTEA,
    "varbinary": ColumnType.BYTEA,
    "serial4": ColumnType.SERIAL,
    "serial8": ColumnType.BIGSERIAL,
    "varbit": ColumnType.BIT_VARYING,
}

# Element keywords that open a table-level constraint rather than a column
_TABLE_CONSTRAINT_WORDS = (
    "CONSTRAINT", "PRIMARY", "FOREIGN", "UNIQUE", "KEY", "INDEX",
    "CHECK", "EXCLUDE", "FULLTEXT", "SPATIAL", "LIKE",
)


def canonical_sql_type(type_name: str) -> Optional[ColumnType]:
    """Map a SQL type name (without size arguments) to a canonical type."""
    key = " ".join(type_name.lower().split())
    return ColumnType.parse(key) or SQL_TYPE_ALIASES.get(key)


@dataclass
class ForeignKeyRef:
    """A ``FOREIGN KEY (f) REFERENCES t(f)`` occurrence, by name."""

    source_table: Optional[str]
    source_field: str
    target_table: str
    target_field: str


@dataclass
class _Document:
    tables: List[Tuple[str, List[TableField]]] = field(default_factory=list)
    foreign_keys: List[ForeignKeyRef] = field(default_factory=list)
    database_name: Optional[str] = None


class _Cursor:
    """Forward-only reader over one statement's tokens."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Optional[Token]:
        index = self.pos + offset
        return self.tokens[index] if index < len(self.tokens) else None

    def advance(self) -> Optional[Token]:
        token = self.peek()
        if token is not None:
            self.pos += 1
        return token

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def accept(self, *keywords: str) -> bool:
        """Consume the given keywords in sequence, or nothing at all."""
        for offset, word in enumerate(keywords):
            token = self.peek(offset)
            if token is None or not token.is_keyword(word):
                return False
        self.pos += len(keywords)
        return True

    def accept_punct(self, char: str) -> bool:
        token = self.peek()
        if token is not None and token.is_punct(char):
            self.pos += 1
            return True
        return False

    def name(self) -> Optional[str]:
        """Read a possibly qualified name and return its last part."""
        token = self.peek()
        if token is None or not token.is_name:
            return None
        self.advance()
        value = token.value
        while self.accept_punct("."):
            part = self.advance()
            if part is None or not part.is_name:
                break
            value = part.value
        return value

    def group(self) -> Optional[List[Token]]:
        """Read a parenthesized group and return the tokens inside it."""
        if not self.accept_punct("("):
            return None
        inner: List[Token] = []
        depth = 1
        while not self.at_end():
            token = self.advance()
            if token.is_punct("("):
                depth += 1
            elif token.is_punct(")"):
                depth -= 1
                if depth == 0:
                    return inner
            inner.append(token)
        return inner

    def rest(self) -> List[Token]:
        tokens = self.tokens[self.pos:]
        self.pos = len(self.tokens)
        return tokens


class SQLParser:
    """Recursive-descent reader for the subset of DDL the importer understands."""

    def __init__(self, text: str):
        self.text = text
        self.doc = _Document()

    def source(self, tokens: List[Token]) -> str:
        """Original source text spanned by ``tokens``."""
        if not tokens:
            return ""
        return self.text[tokens[0].start:tokens[-1].end]

    def parse(self) -> _Document:
        for statement in split_top_level(tokenize(self.text), ";"):
            self.statement(statement)
        return self.doc

    def statement(self, tokens: List[Token]) -> None:
        cur = _Cursor(tokens)
        if cur.accept("CREATE"):
            cur.accept("OR", "REPLACE")
            for modifier in ("TEMPORARY", "TEMP", "UNLOGGED"):
                cur.accept(modifier)
            if cur.accept("TABLE"):
                self.create_table(cur)
                return
            if cur.accept("DATABASE"):
                cur.accept("IF", "NOT", "EXISTS")
                self.doc.database_name = self.doc.database_name or cur.name()
                return
        elif cur.accept("ALTER", "TABLE"):
            cur.accept("ONLY")
            cur.accept("IF", "EXISTS")
            table_name = cur.name()
            self.scan_foreign_keys(cur.rest(), table_name)
            return
        self.scan_foreign_keys(tokens, None)

    def create_table(self, cur: _Cursor) -> None:
        cur.accept("IF", "NOT", "EXISTS")
        table_name = cur.name()
        body = cur.group()
        if table_name is None or body is None:
            return
        fields: List[TableField] = []
        for element in split_top_level(body, ","):
            self.table_element(element, table_name, fields)
        self.doc.tables.append((table_name, fields))

    def table_element(self, tokens: List[Token], table_name: str, fields: List[TableField]) -> None:
        first = tokens[0]
        if not first.is_keyword(*_TABLE_CONSTRAINT_WORDS):
            column = self.column(_Cursor(tokens), table_name)
            if column is not None:
                fields.append(column)
            return

        cur = _Cursor(tokens)
        if cur.accept("CONSTRAINT"):
            cur.name()
        if cur.accept("PRIMARY", "KEY"):
            for name in self.name_list(cur.group()):
                _mark_primary_key(fields, name)
        elif cur.accept("UNIQUE"):
            cur.accept("KEY") or cur.accept("INDEX")
            if not (cur.peek() and cur.peek().is_punct("(")):
                cur.name()
            columns = self.name_list(cur.group())
            # composite unique keys have no per-field representation
            if len(columns) == 1:
                for f in fields:
                    if f.name == columns[0]:
                        f.unique = True
        else:
            self.scan_foreign_keys(tokens, table_name)

    def name_list(self, tokens: Optional[List[Token]]) -> List[str]:
        if not tokens:
            return []
        names = []
        for part in split_top_level(tokens, ","):
            if part[0].is_name:
                names.append(part[0].value)
        return names

    def column_type(self, cur: _Cursor) -> Tuple[str, List[int]]:
        """Read a possibly multi-word type name and its numeric arguments."""
        token = cur.peek()
        if token is None or token.kind is not TokenKind.WORD:
            return "", []
        cur.advance()
        words = [token.value.lower()]
        if words[0] == "double" and cur.accept("PRECISION"):
            words.append("precision")
        elif words[0] in ("character", "char", "bit") and cur.accept("VARYING"):
            words.append("varying")

        args: List[int] = []
        if cur.peek() is not None and cur.peek().is_punct("("):
            for part in split_top_level(cur.group() or [], ","):
                if part[0].kind is TokenKind.NUMBER:
                    args.append(int(float(part[0].value)))

        if words[0] in ("timestamp", "time"):
            if cur.accept("WITH", "TIME", "ZONE"):
                words.extend(["with", "time", "zone"])
            elif cur.accept("WITHOUT", "TIME", "ZONE"):
                words.extend(["without", "time", "zone"])
        if words[0] == "char" and words[-1] == "varying":
            words[0] = "character"
        return " ".join(words), args

    def column(self, cur: _Cursor, table_name: str) -> Optional[TableField]:
        name = cur.name()
        if name is None:
            return None
        type_name, args = self.column_type(cur)
        tail = cur.rest()

        column_type = canonical_sql_type(type_name) if type_name else None
        if column_type is None:
            logger.warning(f"{table_name}.{name}: unknown column type {type_name!r}, using varchar")
            column_type = ColumnType.VARCHAR

        # Constraint keywords are tested on words only so string literals can't match
        flags = " ".join(t.value.lower() for t in tail if t.kind is TokenKind.WORD)
        primary_key = "primary key" in flags
        f = TableField(
            name=name,
            type=column_type,
            nullable=not primary_key and "not null" not in flags,
            primary_key=primary_key,
            foreign_key="foreign key" in flags or "references" in flags,
            unique=primary_key or "unique" in flags,
            auto_increment=(
                "auto_increment" in flags or "autoincrement" in flags or "identity" in flags
            ),
            default_value=self.default_value(tail),
            check_constraint=self.check_constraint(tail),
            comment=self.comment(tail),
        )
        if args and column_type in SIZED_TYPES:
            f.length = args[0]
        elif args and column_type in PRECISION_TYPES:
            f.precision = args[0]
            f.scale = args[1] if len(args) > 1 else None

        self.inline_reference(tail, table_name, name)
        return f

    def default_value(self, tail: List[Token]) -> Optional[str]:
        for index, token in enumerate(tail):
            if not token.is_keyword("DEFAULT"):
                continue
            if index > 0 and tail[index - 1].is_keyword("BY"):
                continue  # GENERATED BY DEFAULT AS IDENTITY
            cur = _Cursor(tail[index + 1:])
            value = cur.peek()
            if value is None or value.is_keyword("NULL"):
                return None
            if value.kind is TokenKind.STRING:
                return value.value
            if value.is_punct("("):
                return self.source(cur.group() or []) or None
            cur.advance()
            if value.kind is TokenKind.OPERATOR and value.value in ("-", "+"):
                number = cur.peek()
                if number is not None and number.kind is TokenKind.NUMBER:
                    return value.value + number.value
            if cur.peek() is not None and cur.peek().is_punct("("):
                start = cur.pos
                cur.group()
                return self.source([value] + cur.tokens[start:cur.pos])
            return value.value
        return None

    def comment(self, tail: List[Token]) -> Optional[str]:
        for index, token in enumerate(tail[:-1]):
            following = tail[index + 1]
            if token.is_keyword("COMMENT") and following.kind is TokenKind.STRING:
                return following.value
        return None

    def check_constraint(self, tail: List[Token]) -> Optional[str]:
        for index, token in enumerate(tail):
            if token.is_keyword("CHECK"):
                inner = _Cursor(tail[index + 1:]).group()
                return self.source(inner) if inner else None
        return None

    def inline_reference(self, tail: List[Token], table_name: str, field_name: str) -> None:
        for index, token in enumerate(tail):
            if token.is_keyword("REFERENCES"):
                cur = _Cursor(tail[index + 1:])
                target = cur.name()
                columns = self.name_list(cur.group())
                if target and len(columns) == 1:
                    self.doc.foreign_keys.append(
                        ForeignKeyRef(table_name, field_name, target, columns[0])
                    )
                return

    def scan_foreign_keys(self, tokens: List[Token], table_name: Optional[str]) -> None:
        """Collect every ``FOREIGN KEY (a) REFERENCES t (b)`` in a token run."""
        cur = _Cursor(tokens)
        while not cur.at_end():
            if not cur.accept("FOREIGN", "KEY"):
                cur.advance()
                continue
            sources = self.name_list(cur.group())
            if not cur.accept("REFERENCES"):
                continue
            target = cur.name()
            targets = self.name_list(cur.group())
            # composite keys are not representable
            if target and len(sources) == 1 and len(targets) == 1:
                self.doc.foreign_keys.append(
                    ForeignKeyRef(table_name, sources[0], target, targets[0])
                )


def _mark_primary_key(fields: List[TableField], name: str) -> None:
    for f in fields:
        if f.name == name:
            f.primary_key = True
            f.nullable = False
            f.unique = True


def _resolve_foreign_keys(doc: _Document, tables: List[Table]) -> List[Relationship]:
    relationships: List[Relationship] = []
    seen = set()
    for ref in doc.foreign_keys:
        if ref.source_table is not None:
            source_table = next((t for t in tables if t.name == ref.source_table), None)
        else:
            source_table = next(
                (t for t in tables if t.find_field_by_name(ref.source_field)), None
            )
        target_table = next((t for t in tables if t.name == ref.target_table), None)
        source_field = source_table.find_field_by_name(ref.source_field) if source_table else None
        target_field = target_table.find_field_by_name(ref.target_field) if target_table else None
        if source_field is None or target_field is None:
            logger.warning(
                f"Dropping foreign key {ref.source_table or '?'}.{ref.source_field} -> "
                f"{ref.target_table}.{ref.target_field}: not found among parsed tables"
            )
            continue
        key = (source_field.id, target_field.id)
        if key in seen:
            continue
        seen.add(key)
        source_field.foreign_key = True
        relationships.append(
            Relationship(
                source_table_id=source_table.id,
                source_field_id=source_field.id,
                target_table_id=target_table.id,
                target_field_id=target_field.id,
                type="many-to-one",
                on_delete="CASCADE",
                on_update="CASCADE",
            )
        )
    return relationships


def import_sql(
    text: str,
    name: Optional[str] = None,
    layout: Optional[TableLayout] = None,
) -> Schema:
    """
    Recover a schema from SQL DDL.

    Reads every ``CREATE TABLE`` block and every single-column foreign key
    (table-level, column-level or via ``ALTER TABLE``). Foreign keys are
    imported as many-to-one relationships with CASCADE actions; references
    to tables or fields that were not parsed are dropped. Text without any
    recognizable DDL yields an empty schema.

    Args:
        text: SQL source
        name: Schema name (defaults to the CREATE DATABASE name, if any)
        layout: Placement for the imported tables (defaults to settings)

    Returns:
        New Schema instance
    """
    doc = SQLParser(text).parse()
    layout = layout or TableLayout.from_settings()
    color = get_settings().default_table_color

    tables = [
        Table(name=table_name, fields=fields, position=layout.position_for(i), color=color)
        for i, (table_name, fields) in enumerate(doc.tables)
    ]
    relationships = _resolve_foreign_keys(doc, tables)

    schema = Schema(
        name=name or doc.database_name or DEFAULT_SCHEMA_NAME,
        description="Imported from SQL DDL",
        tables=tables,
        relationships=relationships,
    )
    logger.info(
        f"Imported {len(tables)} table(s) and {len(relationships)} relationship(s) from SQL"
    )
    return schema
