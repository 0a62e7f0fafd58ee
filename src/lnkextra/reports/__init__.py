"""
lnkextra Reports Package

Display helpers for decoded sections. Pure functions only: callers decide
where the text or table goes.
"""

from .generators import (
    hex_dump,
    format_record,
    format_section,
    section_to_dataframe,
)

__all__ = [
    'hex_dump',
    'format_record',
    'format_section',
    'section_to_dataframe',
]
