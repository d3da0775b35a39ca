from __future__ import annotations

import logging

import gradio as gr

from .converter import CsvDocument, convert
from .errors import ConversionError
from .io_utils import (
    output_file_name,
    read_upload_bytes,
    request_output_dir,
    upload_name,
    write_csv_text,
)
from .settings import get_settings

logger = logging.getLogger(__name__)


def build_status_message(document: CsvDocument, file_name: str, size_mb: float = 0.0) -> str:
    settings = get_settings()
    message = (
        f"Conversion complete! {file_name}: {document.record_count} records exported "
        f"from {len(document.tables)} tables ({len(document.columns)} columns)."
    )
    if document.warnings:
        skipped = ", ".join(sorted({w.table for w in document.warnings}))
        message += f" {len(document.warnings)} table read problem(s): {skipped}."
    if size_mb > settings.max_upload_mb:
        message += f" Note: file is {size_mb:.1f} MB, above the recommended {settings.max_upload_mb:g} MB."
    return message


def convert_upload_handler(file_obj, progress=gr.Progress()):
    """Convert an uploaded GeoPackage and return (csv_path, status, preview)."""
    settings = get_settings()
    try:
        raw = read_upload_bytes(file_obj)
    except (ValueError, OSError) as e:
        return None, f"Failed to process GPKG: {str(e)}", ""

    source_name = upload_name(file_obj)
    size_mb = len(raw) / (1024 * 1024)
    logger.info("File received: %s, size %d bytes", source_name, len(raw))

    def on_progress(value: int):
        if progress is not None:
            progress(value / 100, desc=f"{value}% complete")

    try:
        document = convert(raw, on_progress=on_progress)
    except ConversionError as e:
        return None, f"Failed to process GPKG: {str(e)}", ""

    file_name = output_file_name(source_name)
    try:
        path = write_csv_text(document.text, request_output_dir(settings.output_dir), file_name)
    except OSError as e:
        return None, f"Error writing CSV: {str(e)}", document.preview(settings.preview_lines)

    return path, build_status_message(document, file_name, size_mb), document.preview(settings.preview_lines)


def reset_handler():
    return None, None, "", ""
