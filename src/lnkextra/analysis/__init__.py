"""
lnkextra Analysis Package (Functional Core)

This package contains pure decoding functions with no resource ownership.
Functions accept a caller-owned stream or bytes and return immutable
value types.

Modules:
- records:    Data model (Record, Section, BlockKind, UnknownKind, RawBlock)
- signatures: Block signature classifier
- decoders:   Extra-data section decoder and error taxonomy
"""

from .records import (
    BlockKind,
    BlockObject,
    RawBlock,
    Record,
    Section,
    UnknownKind,
)

from .signatures import (
    SIGNATURE_TABLE,
    classify_signature,
    is_known_signature,
    signature_for,
)

from .decoders import (
    ExtraDataError,
    ShortReadError,
    MalformedRecordError,
    TrailingDataError,
    decode_extra_data,
    decode_extra_data_bytes,
    encode_extra_data,
)

__all__ = [
    # Records
    'BlockKind',
    'BlockObject',
    'RawBlock',
    'Record',
    'Section',
    'UnknownKind',
    # Signatures
    'SIGNATURE_TABLE',
    'classify_signature',
    'is_known_signature',
    'signature_for',
    # Decoders
    'ExtraDataError',
    'ShortReadError',
    'MalformedRecordError',
    'TrailingDataError',
    'decode_extra_data',
    'decode_extra_data_bytes',
    'encode_extra_data',
]
