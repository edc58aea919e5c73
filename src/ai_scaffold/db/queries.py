"""SQL queries used to probe PostgreSQL table metadata."""

HEALTHCHECK_QUERY = """
SELECT
  current_database(),
  current_user,
  current_setting('server_version'),
  current_setting('transaction_read_only')
"""

TABLE_EXISTS_QUERY = """
SELECT EXISTS (
  SELECT 1
  FROM information_schema.tables AS t
  WHERE t.table_schema = %(schema)s
    AND t.table_name = %(table)s
    AND t.table_type IN ('BASE TABLE', 'VIEW')
)
"""

TABLE_COLUMNS_QUERY = """
SELECT c.column_name
FROM information_schema.columns AS c
WHERE c.table_schema = %(schema)s
  AND c.table_name = %(table)s
ORDER BY c.ordinal_position;
"""
