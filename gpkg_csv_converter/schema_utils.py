from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import SchemaReadFailure, TableReadFailure

logger = logging.getLogger(__name__)

# SQLite bookkeeping, GeoPackage metadata and R-tree spatial index shadow tables.
RESERVED_TABLE_PREFIXES = ('sqlite_', 'gpkg_', 'rtree_')


def quote_identifier(name: str) -> str:
    return '"' + str(name).replace('"', '""') + '"'


def is_reserved_table(name: str) -> bool:
    lowered = name.lower()
    return any(lowered.startswith(prefix) for prefix in RESERVED_TABLE_PREFIXES)


def discover_tables(conn: sqlite3.Connection) -> List[str]:
    """List user tables in catalog order, skipping reserved internal tables."""
    try:
        with closing(conn.cursor()) as cur:
            cur.execute("SELECT name FROM sqlite_master WHERE type='table'")
            names = [row[0] for row in cur.fetchall()]
    except sqlite3.Error as exc:
        logger.error("Error querying tables: %s", exc)
        raise SchemaReadFailure(f"Failed to read database structure: {exc}") from exc

    tables: List[str] = []
    for name in names:
        if not isinstance(name, str) or is_reserved_table(name):
            continue
        logger.debug("Found table: %s", name)
        tables.append(name)
    return tables


def read_table_columns(conn: sqlite3.Connection, table: str) -> List[str]:
    with closing(conn.cursor()) as cur:
        cur.execute(f"PRAGMA table_info({quote_identifier(table)})")
        # table_info rows: (cid, name, type, notnull, dflt_value, pk)
        return [row[1] for row in cur.fetchall() if row[1]]


def unify_columns(
    conn: sqlite3.Connection,
    tables: Iterable[str],
    warnings: Optional[List[TableReadFailure]] = None,
) -> Tuple[str, ...]:
    """Build the ordered union of column names across tables.

    First-seen order wins and names shared between tables occupy one position.
    A table whose columns cannot be read contributes nothing; the failure is
    appended to `warnings` when a list is given.
    """
    seen: Dict[str, None] = {}
    for table in tables:
        try:
            columns = read_table_columns(conn, table)
        except sqlite3.Error as exc:
            failure = TableReadFailure(table, 'columns', exc)
            logger.warning("%s", failure)
            if warnings is not None:
                warnings.append(failure)
            continue
        for name in columns:
            seen.setdefault(name, None)
    return tuple(seen)
