from __future__ import annotations


class ConversionError(Exception):
    """Base class for every failure raised while converting a GeoPackage."""


class CorruptDatabase(ConversionError):
    """The uploaded bytes are not an openable SQLite image."""


class NoDataTables(ConversionError):
    """The database opened but holds no user tables."""


class SchemaReadFailure(ConversionError):
    """The catalog (sqlite_master) itself could not be queried."""


class TableReadFailure(ConversionError):
    """Reading one table failed.

    Never raised out of `convert`: instances are collected as warnings and the
    table simply contributes no columns (stage 'columns') or no further rows
    (stage 'rows').
    """

    def __init__(self, table: str, stage: str, cause: Exception):
        super().__init__(f"Error reading {stage} for table {table}: {cause}")
        self.table = table
        self.stage = stage
        self.cause = cause
