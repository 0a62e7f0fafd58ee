"""
Extra-Data Presentation Helpers (Functional Core)

Free functions that turn a decoded ``Section`` into display output:

- ``hex_dump``             : canonical hex + ASCII dump of a byte string.
- ``format_record``        : Size / Signature / Type / Dump block for one record.
- ``format_section``       : ``format_record`` for every record, in order.
- ``section_to_dataframe`` : one row per record for tabular display.

Nothing here writes to a terminal or file, and nothing mutates the section.

Package Location: src/lnkextra/reports/generators.py

Usage::

    from lnkextra.data import read_extra_data
    from lnkextra.reports import format_section

    section, err = read_extra_data(fh)
    print(format_section(section))
"""

from __future__ import annotations

from typing import List

import pandas as pd

from ..analysis.records import Record, Section

_DUMP_WIDTH = 16
_SEPARATOR = "-" * 25

_FRAME_COLUMNS: List[str] = [
    'index', 'size', 'signature', 'kind', 'payload_length'
]


def hex_dump(data: bytes) -> str:
    """
    Render *data* as a hex dump, 16 bytes per line.

    Each line is the offset, two groups of eight hex bytes and the
    printable-ASCII column::

        00000000  41 42 43 44 45 46 47 48  49 4a 4b 4c 4d 4e 4f 50  |ABCDEFGHIJKLMNOP|

    Args:
        data: Bytes to dump.

    Returns:
        Dump text ending in a newline, or ``""`` for empty input.
    """
    lines = []
    for offset in range(0, len(data), _DUMP_WIDTH):
        chunk = data[offset:offset + _DUMP_WIDTH]
        hex_bytes = [f"{b:02x}" for b in chunk]
        left = " ".join(hex_bytes[:8])
        right = " ".join(hex_bytes[8:])
        text = "".join(chr(b) if 0x20 <= b <= 0x7E else "." for b in chunk)
        lines.append(f"{offset:08x}  {left:<23}  {right:<23}  |{text}|\n")
    return "".join(lines)


def format_record(record: Record) -> str:
    """
    Render one record as a labelled block with a payload dump.

    Args:
        record: Decoded record.

    Returns:
        Multi-line string terminated by a separator line.
    """
    return (
        f"Size: {record.size}\n"
        f"Signature: 0x{record.signature:08X}\n"
        f"Type: {record.label}\n"
        f"Dump\n"
        f"{hex_dump(record.payload)}"
        f"{_SEPARATOR}\n"
    )


def format_section(section: Section) -> str:
    """Render every record of *section* in stream order."""
    return "".join(format_record(r) for r in section)


def section_to_dataframe(section: Section) -> pd.DataFrame:
    """
    Summarize a section as a DataFrame, one row per record.

    Args:
        section: Decoded (possibly partial) section.

    Returns:
        DataFrame with columns [index, size, signature, kind, payload_length].
        ``signature`` is a 0x-prefixed hex string; ``kind`` is the label.

    Example:
        >>> section_to_dataframe(section)
           index  size   signature                          kind  payload_length
        0      0    20  0xA0000003              TrackerDataBlock              12
    """
    if not len(section):
        return pd.DataFrame(columns=_FRAME_COLUMNS)

    rows = [
        (i, r.size, f"0x{r.signature:08X}", r.label, r.payload_length)
        for i, r in enumerate(section)
    ]
    df = pd.DataFrame(rows, columns=_FRAME_COLUMNS)

    df['index'] = df['index'].astype(int)
    df['size'] = df['size'].astype(int)
    df['payload_length'] = df['payload_length'].astype(int)

    return df
