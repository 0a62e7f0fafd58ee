"""
Extra-Data Section Decoder (Functional Core)

Parses the trailing extra-data region of a Shell Link file: a run of
length-prefixed blocks terminated by a size value below 0x04.

Binary format (little-endian, no padding, no count field)::

    block      := size:u32 signature:u32 payload:u8[size - 8]   (size >= 8)
    terminal   := value:u32                                     (value < 4)
    section    := block* terminal

The decoder reads from a caller-owned binary stream positioned at the first
byte of the section. It consumes exactly the framed bytes plus the 4-byte
terminal block, never seeks, and never closes the stream.

Every decoding error carries the partial ``Section`` built before the
failure so callers can still inspect the blocks that were read.

Package Location: src/lnkextra/analysis/decoders.py
"""

import io
import logging
from typing import BinaryIO, List, Optional

from .records import (
    HEADER_SIZE,
    TERMINAL_LIMIT,
    U32_STRUCT,
    Record,
    Section,
    UnknownKind,
)
from .signatures import classify_signature

logger = logging.getLogger(__name__)


class ExtraDataError(Exception):
    """
    Base exception for extra-data decoding errors.

    Attributes:
        section: The partial ``Section`` decoded before the error (or the
            full section, for ``TrailingDataError``).
    """

    def __init__(self, message: str, section: Optional[Section] = None):
        super().__init__(message)
        self.section = section if section is not None else Section()


class ShortReadError(ExtraDataError):
    """
    Raised when the stream ends inside a block.

    Attributes:
        phase:    Which field was being read: ``'size'``, ``'signature'``
                  or ``'payload'``.
        expected: Number of bytes the framing required.
        received: Number of bytes actually available.
    """

    def __init__(
        self,
        phase: str,
        expected: int,
        received: int,
        section: Optional[Section] = None,
    ):
        self.phase = phase
        self.expected = expected
        self.received = received
        super().__init__(
            f"reading {phase}: expected {expected} bytes, got {received}",
            section,
        )


class MalformedRecordError(ExtraDataError):
    """Raised when a block declares a size of 4..7 (shorter than its header)."""

    def __init__(self, size: int, section: Optional[Section] = None):
        self.size = size
        super().__init__(
            f"malformed block: declared size {size} is smaller than the "
            f"{HEADER_SIZE}-byte block header",
            section,
        )


class TrailingDataError(ExtraDataError):
    """Raised in strict mode when bytes follow the terminal block."""

    def __init__(self, section: Optional[Section] = None):
        super().__init__("unexpected data after terminal block", section)


def _read_exact(stream: BinaryIO, count: int) -> bytes:
    """Read up to *count* bytes, looping over short ``read`` results."""
    chunks = []
    remaining = count
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def _read_u32(stream: BinaryIO, phase: str, records: List[Record]) -> int:
    raw = _read_exact(stream, U32_STRUCT.size)
    if len(raw) < U32_STRUCT.size:
        raise ShortReadError(
            phase, U32_STRUCT.size, len(raw), Section.from_records(records)
        )
    return U32_STRUCT.unpack(raw)[0]


def _has_trailing_data(stream: BinaryIO) -> bool:
    peek = getattr(stream, "peek", None)
    if peek is not None:
        return bool(peek(1))
    return bool(stream.read(1))


def decode_extra_data(stream: BinaryIO, strict: bool = False) -> Section:
    """
    Decode an extra-data section from a binary stream.

    Args:
        stream: Readable binary stream positioned at the start of the
            section. It is advanced past the terminal block and left open.
        strict: When ``True``, fail if any byte follows the terminal
            block. The default leaves trailing bytes unread. The check
            uses ``stream.peek(1)`` when the stream has it (buffered
            readers); otherwise it reads, and so consumes, one byte.

    Returns:
        ``Section`` with the blocks in stream order and the terminal value.

    Raises:
        ShortReadError: If the stream ends inside a block header or payload.
        MalformedRecordError: If a block declares a size of 4..7.
        TrailingDataError: In strict mode, if data follows the terminal.

    Example:
        >>> import io
        >>> raw = bytes.fromhex("08000000010000a0" "00000000")
        >>> section = decode_extra_data(io.BytesIO(raw))
        >>> [r.label for r in section]
        ['EnvironmentVariableDataBlock']
    """
    records: List[Record] = []

    while True:
        size = _read_u32(stream, "size", records)

        if size < TERMINAL_LIMIT:
            section = Section.from_records(records, terminal_value=size)
            break

        if size < HEADER_SIZE:
            raise MalformedRecordError(size, Section.from_records(records))

        signature = _read_u32(stream, "signature", records)

        payload_len = size - HEADER_SIZE
        payload = _read_exact(stream, payload_len)
        if len(payload) < payload_len:
            raise ShortReadError(
                "payload", payload_len, len(payload),
                Section.from_records(records),
            )

        kind = classify_signature(signature)
        if isinstance(kind, UnknownKind):
            logger.info(
                f"Unrecognized extra-data block signature 0x{signature:08X}",
                extra={"signature": signature, "block_index": len(records)},
            )
        logger.debug(
            f"Decoded {kind.label} ({size} bytes)",
            extra={
                "block_index": len(records),
                "size": size,
                "signature": signature,
                "kind": kind.label,
            },
        )
        records.append(Record(size, signature, kind, payload))

    if strict and _has_trailing_data(stream):
        raise TrailingDataError(section)

    return section


def decode_extra_data_bytes(data: bytes, strict: bool = False) -> Section:
    """
    Decode an extra-data section held in memory.

    Args:
        data:   Bytes starting at the first byte of the section.
        strict: See ``decode_extra_data``.

    Returns:
        Decoded ``Section``.
    """
    return decode_extra_data(io.BytesIO(data), strict=strict)


def encode_extra_data(section: Section) -> bytes:
    """
    Encode a section using the extra-data framing.

    Inverse of ``decode_extra_data`` for complete sections.

    Raises:
        ValueError: If *section* is partial.
    """
    return section.to_bytes()
