import io
import os

import pytest

from gpkg_csv_converter.io_utils import (
    output_file_name,
    read_upload_bytes,
    request_output_dir,
    upload_name,
    write_csv_text,
)


@pytest.mark.parametrize("source, expected", [
    ("parcels.gpkg", "parcels_all_tables.csv"),
    ("/uploads/Survey.GPKG", "Survey_all_tables.csv"),
    ("site.v2.gpkg", "site.v2_all_tables.csv"),
    ("noext", "noext_all_tables.csv"),
    ("", "output_all_tables.csv"),
    (None, "output_all_tables.csv"),
])
def test_output_file_name(source, expected):
    assert output_file_name(source) == expected


def test_read_upload_bytes_from_path(tmp_path):
    path = tmp_path / "a.gpkg"
    path.write_bytes(b"\x00\x01")
    assert read_upload_bytes(str(path)) == b"\x00\x01"


def test_read_upload_bytes_from_file_object():
    buf = io.BytesIO(b"abc")
    buf.read()
    assert read_upload_bytes(buf) == b"abc"


def test_read_upload_bytes_requires_upload():
    with pytest.raises(ValueError):
        read_upload_bytes(None)


def test_upload_name():
    assert upload_name("/tmp/gradio/abc/roads.gpkg") == "roads.gpkg"
    assert upload_name(None) == ""


def test_write_csv_text(tmp_path):
    path = write_csv_text('"table"\n"a"', str(tmp_path / "nested"), "x_all_tables.csv")
    with open(path, encoding="utf-8", newline="") as f:
        assert f.read() == '"table"\n"a"'


def test_request_output_dir_is_unique(tmp_path):
    base = str(tmp_path / "out")
    first = request_output_dir(base)
    second = request_output_dir(base)
    assert first != second
    assert os.path.dirname(first) == base
