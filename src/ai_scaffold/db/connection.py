"""PostgreSQL connection and health check utilities."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

import psycopg

from ai_scaffold.db.queries import HEALTHCHECK_QUERY


class DatabaseConnectionError(RuntimeError):
    """Raised when a PostgreSQL connection or health check fails."""


@dataclass(frozen=True)
class HealthcheckResult:
    """Information returned by a successful PostgreSQL health check."""

    current_database: str
    current_user: str
    server_version: str
    transaction_read_only: bool


@contextmanager
def connect_readonly(
    postgres_dsn: str, connect_timeout: int = 5
) -> Iterator[psycopg.Connection]:
    """Open a PostgreSQL session that cannot write to the database."""
    try:
        conn = psycopg.connect(
            postgres_dsn,
            connect_timeout=connect_timeout,
            options="-c default_transaction_read_only=on",
        )
    except psycopg.OperationalError as exc:
        raise DatabaseConnectionError(
            f"Could not connect to PostgreSQL with provided DSN: {exc}"
        ) from exc

    with conn:
        yield conn


def check_postgres_health(postgres_dsn: str) -> HealthcheckResult:
    """Verify connectivity and that schema lookups run in a read-only session."""
    try:
        with connect_readonly(postgres_dsn) as conn:
            row = conn.execute(HEALTHCHECK_QUERY).fetchone()
    except psycopg.Error as exc:
        raise DatabaseConnectionError(f"PostgreSQL health check failed: {exc}") from exc

    if row is None:
        raise DatabaseConnectionError("PostgreSQL health check returned no data.")

    current_database, current_user, server_version, read_only = row
    if read_only != "on":
        raise DatabaseConnectionError(
            "Connected successfully but session is not read-only."
        )

    return HealthcheckResult(
        current_database=current_database,
        current_user=current_user,
        server_version=server_version,
        transaction_read_only=True,
    )

