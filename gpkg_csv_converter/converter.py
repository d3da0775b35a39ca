from __future__ import annotations

import enum
import logging
import math
import sqlite3
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .errors import ConversionError, CorruptDatabase, NoDataTables, TableReadFailure
from .records import extract_rows, format_header
from .schema_utils import discover_tables, unify_columns

logger = logging.getLogger(__name__)

SQLITE_HEADER = b'SQLite format 3\x00'

ProgressCallback = Callable[[int], None]


class ConversionStage(enum.Enum):
    IDLE = 'idle'
    OPENING = 'opening'
    DISCOVERING_SCHEMA = 'discovering_schema'
    UNIFYING_COLUMNS = 'unifying_columns'
    SCANNING_ROWS = 'scanning_rows'
    FINALIZED = 'finalized'
    FAILED = 'failed'


class ProgressTracker:
    """Forward 0-100 progress to a callback, never moving backwards until reset."""

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self._callback = callback
        self.value = 0

    def _emit(self):
        if self._callback is not None:
            self._callback(self.value)

    def start(self):
        self.value = 0
        self._emit()

    def advance(self, value: float):
        value = max(0, min(100, int(value)))
        if value <= self.value:
            return
        self.value = value
        self._emit()

    def reset(self):
        self.value = 0
        self._emit()


@dataclass
class CsvDocument:
    """The flattened CSV: header line first, then one line per source row."""

    lines: List[str]
    tables: Tuple[str, ...] = ()
    columns: Tuple[str, ...] = ()
    warnings: Tuple[TableReadFailure, ...] = ()

    @property
    def text(self) -> str:
        return '\n'.join(self.lines)

    @property
    def header(self) -> str:
        return self.lines[0] if self.lines else ''

    @property
    def record_count(self) -> int:
        return max(0, len(self.lines) - 1)

    def preview(self, limit: int = 5) -> str:
        return '\n'.join(self.lines[:max(0, int(limit))])


def _writable_image(data: bytes) -> bytes:
    # WAL-mode images cannot be read from memory; flip the header to rollback-journal mode.
    if data.startswith(SQLITE_HEADER) and data[18:20] == b'\x02\x02':
        return data[:18] + b'\x01\x01' + data[20:]
    return data


def open_database(data: bytes) -> sqlite3.Connection:
    """Open an in-memory connection over a SQLite image.

    Raises CorruptDatabase when the bytes are not a readable database.
    """
    conn = sqlite3.connect(':memory:')
    conn.text_factory = lambda b: b.decode('utf-8', errors='replace')
    try:
        if data:
            conn.deserialize(_writable_image(data))
        conn.execute('PRAGMA schema_version').fetchone()
    except (sqlite3.Error, OverflowError, MemoryError) as exc:
        conn.close()
        raise CorruptDatabase(f"File is not a valid GeoPackage/SQLite database: {exc}") from exc
    return conn


def _scan_table(conn, table, columns, lines, warnings) -> int:
    count = 0
    try:
        for line in extract_rows(conn, table, columns):
            lines.append(line)
            count += 1
    except sqlite3.Error as exc:
        failure = TableReadFailure(table, 'rows', exc)
        logger.warning("%s (kept %d rows)", failure, count)
        warnings.append(failure)
    return count


def convert(raw_bytes, on_progress: Optional[ProgressCallback] = None) -> CsvDocument:
    """Convert a GeoPackage byte buffer into one CSV document covering all user tables.

    Raises CorruptDatabase, NoDataTables or SchemaReadFailure. Per-table read
    problems do not abort the run; they end up in `CsvDocument.warnings`.
    Progress goes through fixed checkpoints and is reset to 0 on exit.
    """
    progress = ProgressTracker(on_progress)
    progress.start()
    stage = ConversionStage.IDLE
    conn = None

    def enter(next_stage: ConversionStage) -> ConversionStage:
        logger.info("Conversion stage: %s", next_stage.value)
        return next_stage

    try:
        stage = enter(ConversionStage.OPENING)
        progress.advance(10)
        if raw_bytes is None:
            raise CorruptDatabase("No data to convert.")
        data = bytes(raw_bytes)
        logger.info("Starting GPKG conversion, %d bytes", len(data))
        progress.advance(20)
        progress.advance(30)
        conn = open_database(data)
        progress.advance(40)

        stage = enter(ConversionStage.DISCOVERING_SCHEMA)
        tables = discover_tables(conn)
        logger.info("Total tables found: %d", len(tables))
        if not tables:
            raise NoDataTables("No data tables found in GeoPackage. File may be empty or corrupted.")
        progress.advance(50)

        stage = enter(ConversionStage.UNIFYING_COLUMNS)
        warnings: List[TableReadFailure] = []
        columns = unify_columns(conn, tables, warnings)
        logger.info("Total unique columns found: %d", len(columns))
        progress.advance(60)

        stage = enter(ConversionStage.SCANNING_ROWS)
        lines = [format_header(columns)]
        total_rows = 0
        for done, table in enumerate(tables, start=1):
            table_rows = _scan_table(conn, table, columns, lines, warnings)
            total_rows += table_rows
            logger.debug("Table %s: %d rows processed", table, table_rows)
            progress.advance(60 + math.floor(done / len(tables) * 30 + 0.5))
        logger.info("Total rows processed: %d", total_rows)
        progress.advance(95)

        stage = enter(ConversionStage.FINALIZED)
        document = CsvDocument(
            lines=lines,
            tables=tuple(tables),
            columns=columns,
            warnings=tuple(warnings),
        )
        progress.advance(100)
        return document
    except ConversionError as exc:
        logger.error("GPKG conversion failed during %s: %s", stage.value, exc)
        enter(ConversionStage.FAILED)
        raise
    finally:
        if conn is not None:
            conn.close()
        progress.reset()
