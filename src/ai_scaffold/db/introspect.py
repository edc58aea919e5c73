"""Table lookups used to ground migration prompts in the live schema."""

from __future__ import annotations

import logging
from typing import Protocol

import psycopg
from sqlglot import exp, parse_one
from sqlglot.errors import ParseError, TokenError

from ai_scaffold.db.connection import DatabaseConnectionError, connect_readonly
from ai_scaffold.db.queries import TABLE_COLUMNS_QUERY, TABLE_EXISTS_QUERY

logger = logging.getLogger(__name__)


class TableIdentifierError(ValueError):
    """Raised when a table reference cannot be parsed."""


class SchemaNotFoundError(LookupError):
    """Raised when a referenced table does not exist."""

    def __init__(self, table: str) -> None:
        super().__init__(f"The table '{table}' does not exist.")
        self.table = table


class SchemaProbeError(RuntimeError):
    """Raised when the database cannot answer a schema lookup."""


class SchemaProbe(Protocol):
    """Minimal schema capability needed by the generation pipeline."""

    def table_exists(self, table: str) -> bool: ...

    def list_columns(self, table: str) -> list[str]: ...


def _identifier_value(identifier: exp.Expression | None) -> str | None:
    if identifier is None:
        return None
    if not isinstance(identifier, exp.Identifier):
        raise TableIdentifierError(f"Unsupported table reference part: {identifier.sql()}")
    # PostgreSQL folds unquoted identifiers to lower case.
    return identifier.this if identifier.quoted else identifier.this.lower()


def parse_table_identifier(table: str, default_schema: str = "public") -> tuple[str, str]:
    """Split ``table`` or ``schema.table`` into a ``(schema, table)`` pair."""
    normalized = table.strip()
    if not normalized:
        raise TableIdentifierError("Table name cannot be empty.")

    try:
        parsed = parse_one(normalized, into=exp.Table, read="postgres")
    except (ParseError, TokenError) as exc:
        raise TableIdentifierError(f"Invalid table name {table!r}: {exc}") from exc

    if not isinstance(parsed, exp.Table) or parsed.alias or parsed.args.get("catalog"):
        raise TableIdentifierError(
            f"Invalid table name {table!r}: expected 'table' or 'schema.table'."
        )

    name = _identifier_value(parsed.args.get("this"))
    schema = _identifier_value(parsed.args.get("db")) or default_schema
    if not name:
        raise TableIdentifierError(f"Invalid table name {table!r}.")
    return schema, name


class PostgresSchemaProbe:
    """Schema probe backed by PostgreSQL ``information_schema``."""

    def __init__(self, postgres_dsn: str, default_schema: str = "public") -> None:
        self.postgres_dsn = postgres_dsn
        self.default_schema = default_schema

    def table_exists(self, table: str) -> bool:
        row = self._fetch(TABLE_EXISTS_QUERY, table)
        return bool(row and row[0][0])

    def list_columns(self, table: str) -> list[str]:
        return [column_name for (column_name,) in self._fetch(TABLE_COLUMNS_QUERY, table)]

    def _fetch(self, query: str, table: str) -> list[tuple]:
        schema_name, table_name = parse_table_identifier(table, self.default_schema)
        logger.debug("Probing table %s.%s", schema_name, table_name)
        try:
            with connect_readonly(self.postgres_dsn) as conn:
                with conn.cursor() as cur:
                    cur.execute(query, {"schema": schema_name, "table": table_name})
                    return cur.fetchall()
        except DatabaseConnectionError as exc:
            raise SchemaProbeError(str(exc)) from exc
        except psycopg.Error as exc:
            raise SchemaProbeError(
                f"Schema lookup for '{table}' failed: {exc}"
            ) from exc
