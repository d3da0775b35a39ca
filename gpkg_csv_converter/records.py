from __future__ import annotations

import sqlite3
from contextlib import closing
from typing import Any, Dict, Iterator, Sequence

from .formatting import cell_text, csv_line
from .schema_utils import quote_identifier


def iter_table_records(conn: sqlite3.Connection, table: str) -> Iterator[Dict[str, Any]]:
    """Yield every row of a table as a column-name -> value dict, in scan order."""
    with closing(conn.cursor()) as cur:
        cur.execute(f"SELECT * FROM {quote_identifier(table)}")
        names = [d[0] for d in cur.description or ()]
        for row in cur:
            yield dict(zip(names, row))


def format_row(table: str, record: Dict[str, Any], columns: Sequence[str]) -> str:
    """One CSV line: quoted table name, then each unified column in order."""
    cells = [table]
    cells.extend(cell_text(record.get(column)) for column in columns)
    return csv_line(cells)


def format_header(columns: Sequence[str]) -> str:
    return csv_line(['table', *columns])


def extract_rows(conn: sqlite3.Connection, table: str, columns: Sequence[str]) -> Iterator[str]:
    """Lazily produce the CSV lines for one table.

    Lines are yielded as rows are scanned, so a caller consuming the generator
    keeps whatever was produced before a mid-scan failure.
    """
    for record in iter_table_records(conn, table):
        yield format_row(table, record, columns)
