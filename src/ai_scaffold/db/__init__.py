"""Database helpers for ai-scaffold."""

from ai_scaffold.db.connection import (
    DatabaseConnectionError,
    HealthcheckResult,
    check_postgres_health,
    connect_readonly,
)
from ai_scaffold.db.introspect import (
    PostgresSchemaProbe,
    SchemaNotFoundError,
    SchemaProbe,
    SchemaProbeError,
    TableIdentifierError,
    parse_table_identifier,
)

__all__ = [
    "DatabaseConnectionError",
    "HealthcheckResult",
    "PostgresSchemaProbe",
    "SchemaNotFoundError",
    "SchemaProbe",
    "SchemaProbeError",
    "TableIdentifierError",
    "check_postgres_health",
    "connect_readonly",
    "parse_table_identifier",
]
