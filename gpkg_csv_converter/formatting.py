from __future__ import annotations

import csv
import io
import json
import math
from decimal import Decimal
from typing import Any, Iterable, Optional


def csv_line(cells: Iterable[Optional[str]]) -> str:
    """Join cells into one CSV line: None stays a bare empty cell, everything else is quoted."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_NOTNULL, lineterminator='\n')
    writer.writerow(cells)
    return buf.getvalue()[:-1]


def csv_escape(text: Any) -> str:
    """Wrap text in double quotes, doubling any embedded quote."""
    return csv_line([str(text)])


def to_hex(blob) -> str:
    return bytes(blob).hex()


def _float_text(value: float) -> str:
    # Shortest round-trip digits laid out the way JavaScript's Number#toString does.
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value == 0:
        return '0'

    sign = '-' if value < 0 else ''
    parsed = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = ''.join(str(d) for d in parsed.digits)
    k = len(digits)
    n = parsed.exponent + k

    if k <= n <= 21:
        return sign + digits + '0' * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + '.' + digits[n:]
    if -6 < n <= 0:
        return sign + '0.' + '0' * -n + digits

    exponent = n - 1
    mantissa = digits if k == 1 else digits[0] + '.' + digits[1:]
    return f"{sign}{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"


def _number_text(value) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    return _float_text(value)


def cell_text(value: Any) -> Optional[str]:
    """Text content of one cell, or None for a null cell.

    - blobs -> "0x" + lowercase hex
    - numbers and booleans -> canonical text
    - anything else that is not text -> compact JSON
    """
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray, memoryview)):
        return '0x' + to_hex(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return _number_text(value)

    try:
        return json.dumps(value, ensure_ascii=False, separators=(',', ':'))
    except (TypeError, ValueError):
        return str(value)


def format_csv_value(value: Any) -> str:
    """Render one cell value as CSV cell text; null becomes an empty cell."""
    text = cell_text(value)
    if text is None:
        return ''
    return csv_line([text])
