"""Core logic for the GeoPackage to CSV converter.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- open a GeoPackage from an uploaded byte buffer
- discover user tables and unify their columns
- flatten every row of every table into one CSV document
"""
from .converter import CsvDocument, convert
from .errors import (
    ConversionError,
    CorruptDatabase,
    NoDataTables,
    SchemaReadFailure,
    TableReadFailure,
)
from .io_utils import output_file_name

__all__ = [
    'ConversionError',
    'CorruptDatabase',
    'CsvDocument',
    'NoDataTables',
    'SchemaReadFailure',
    'TableReadFailure',
    'convert',
    'output_file_name',
]
