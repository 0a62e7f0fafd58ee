"""
lnkextra Data Package (Imperative Shell)

Boundary between the decoder and the Shell Link loader that owns the
input stream.

Modules:
- reader: Reads the extra-data section and applies section-level error
          context.
"""

from .reader import (
    ExtraDataSectionError,
    read_extra_data,
    read_extra_data_bytes,
)

__all__ = [
    'ExtraDataSectionError',
    'read_extra_data',
    'read_extra_data_bytes',
]
