"""
Extra-Data Block Signature Classifier (Functional Core)

Maps the 32-bit signature of an extra-data block to a symbolic kind.
The lookup is total: signatures outside the table classify to an
``UnknownKind`` instead of failing, since new block types may appear in
files written by newer shells.

Package Location: src/lnkextra/analysis/signatures.py
"""

from types import MappingProxyType
from typing import Mapping

from .records import BlockKind, Kind, UnknownKind

# ---------------------------------------------------------------------------
# Signature table (read-only)
# ---------------------------------------------------------------------------
SIGNATURE_TABLE: Mapping[int, BlockKind] = MappingProxyType({
    0xA0000001: BlockKind.ENVIRONMENT_VARIABLE,
    0xA0000002: BlockKind.CONSOLE,
    0xA0000003: BlockKind.TRACKER,
    0xA0000004: BlockKind.CONSOLE_FE,
    0xA0000005: BlockKind.SPECIAL_FOLDER,
    0xA0000006: BlockKind.DARWIN,
    0xA0000007: BlockKind.ICON_ENVIRONMENT,
    0xA0000008: BlockKind.SHIM,
    0xA0000009: BlockKind.PROPERTY_STORE,
    0xA000000B: BlockKind.KNOWN_FOLDER,
    0xA000000C: BlockKind.VISTA_AND_ABOVE_ID_LIST,
})

_KIND_TO_SIGNATURE: Mapping[BlockKind, int] = MappingProxyType(
    {kind: sig for sig, kind in SIGNATURE_TABLE.items()}
)


def classify_signature(signature: int) -> Kind:
    """
    Classify a block signature.

    Args:
        signature: Unsigned 32-bit signature read from the block header.

    Returns:
        The matching ``BlockKind``, or ``UnknownKind(signature)`` when the
        signature is not in the table.

    Example:
        >>> classify_signature(0xA0000003).label
        'TrackerDataBlock'
        >>> classify_signature(0xDEADBEEF).label
        'Signature Not Found - deadbeef'
    """
    kind = SIGNATURE_TABLE.get(signature)
    if kind is None:
        return UnknownKind(signature)
    return kind


def is_known_signature(signature: int) -> bool:
    """Return True if *signature* belongs to a documented block type."""
    return signature in SIGNATURE_TABLE


def signature_for(kind: BlockKind) -> int:
    """Reverse lookup: the signature that identifies *kind*."""
    return _KIND_TO_SIGNATURE[kind]


def kind_matches(signature: int, kind: Kind) -> bool:
    """Return True if *kind* is what ``classify_signature`` gives for *signature*."""
    return classify_signature(signature) == kind
