"""
lnkextra - Shell Link extra-data section decoder

Decodes the trailing extra-data region of a Windows Shell Link (.lnk)
file into classified, unparsed blocks, following the Functional Core,
Imperative Shell split.

Structure:
- analysis/ : Functional Core (data model, classifier, decoder)
- data/     : Imperative Shell (section reader, error context)
- reports/  : display helpers (text, hex dump, DataFrame)
- utils/    : logging
"""

__version__ = "0.1.0"

from .analysis import (
    BlockKind,
    ExtraDataError,
    MalformedRecordError,
    RawBlock,
    Record,
    Section,
    ShortReadError,
    TrailingDataError,
    UnknownKind,
    classify_signature,
    decode_extra_data,
    decode_extra_data_bytes,
    encode_extra_data,
)
from .data import ExtraDataSectionError, read_extra_data, read_extra_data_bytes

__all__ = [
    'BlockKind',
    'ExtraDataError',
    'ExtraDataSectionError',
    'MalformedRecordError',
    'RawBlock',
    'Record',
    'Section',
    'ShortReadError',
    'TrailingDataError',
    'UnknownKind',
    'classify_signature',
    'decode_extra_data',
    'decode_extra_data_bytes',
    'encode_extra_data',
    'read_extra_data',
    'read_extra_data_bytes',
]
