from __future__ import annotations

import os
import tempfile

CSV_SUFFIX = '_all_tables.csv'


def upload_name(file_obj) -> str:
    if file_obj is None:
        return ''
    if hasattr(file_obj, 'orig_name') and file_obj.orig_name:
        return os.path.basename(file_obj.orig_name)
    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    return os.path.basename(str(path))


def read_upload_bytes(file_obj) -> bytes:
    """Read raw bytes from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, str):
            content = content.encode('utf-8')
        return bytes(content)

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'rb') as f:
        return f.read()


def output_file_name(source_name: str) -> str:
    """Suggested CSV name: the upload name without extension + '_all_tables.csv'."""
    base = os.path.basename(source_name or '')
    stem, _ = os.path.splitext(base)
    if not stem:
        stem = 'output'
    return stem + CSV_SUFFIX


def write_csv_text(text: str, directory: str, file_name: str) -> str:
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, file_name)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(text)
    return path


def request_output_dir(base_dir: str) -> str:
    """Fresh directory under base_dir so concurrent uploads with the same name don't collide."""
    os.makedirs(base_dir, exist_ok=True)
    return tempfile.mkdtemp(prefix='gpkg_csv_', dir=base_dir)
