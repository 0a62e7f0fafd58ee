"""
Extra-Data Data Model (Functional Core)

Immutable value types produced by the extra-data decoder:

- ``BlockKind``   : the documented block types.
- ``UnknownKind`` : fallback kind for signatures outside the table.
- ``RawBlock``    : the unparsed variant of a record's block object.
- ``Record``      : one size/signature/payload block.
- ``Section``     : the ordered records plus the terminal value.

Package Location: src/lnkextra/analysis/records.py
"""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

# size (u32) + signature (u32), little-endian
HEADER_STRUCT = struct.Struct("<II")
HEADER_SIZE = HEADER_STRUCT.size
U32_STRUCT = struct.Struct("<I")

# Size values below this mark the end of the section.
TERMINAL_LIMIT = 0x04


class BlockKind(enum.Enum):
    """Documented extra-data block types. The value is the display label."""

    ENVIRONMENT_VARIABLE = "EnvironmentVariableDataBlock"
    CONSOLE = "ConsoleDataBlock"
    TRACKER = "TrackerDataBlock"
    CONSOLE_FE = "ConsoleFEDataBlock"
    SPECIAL_FOLDER = "SpecialFolderDataBlock"
    DARWIN = "DarwinDataBlock"
    ICON_ENVIRONMENT = "IconEnvironmentDataBlock"
    SHIM = "ShimDataBlock"
    PROPERTY_STORE = "PropertyStoreDataBlock"
    KNOWN_FOLDER = "KnownFolderDataBlock"
    VISTA_AND_ABOVE_ID_LIST = "VistaAndAboveIDListDataBlock"

    @property
    def label(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UnknownKind:
    """Kind assigned to a signature that is not in the signature table."""

    signature: int

    @property
    def signature_hex(self) -> str:
        return f"{self.signature:08x}"

    @property
    def label(self) -> str:
        return f"Signature Not Found - {self.signature_hex}"

    def __str__(self) -> str:
        return self.label


Kind = Union[BlockKind, UnknownKind]


@dataclass(frozen=True)
class RawBlock:
    """
    Block object for a record whose payload has not been interpreted.

    Structured per-kind block types can be added alongside this one;
    ``BlockObject`` is the union callers should match on.
    """

    kind: Kind
    data: bytes


BlockObject = Union[RawBlock]


@dataclass(frozen=True)
class Record:
    """One extra-data block: header fields plus the raw payload."""

    size: int
    signature: int
    kind: Kind
    payload: bytes
    block: Optional[BlockObject] = None

    def __post_init__(self) -> None:
        if self.size < HEADER_SIZE:
            raise ValueError(
                f"Record size {self.size} is smaller than the "
                f"{HEADER_SIZE}-byte header"
            )
        if len(self.payload) != self.size - HEADER_SIZE:
            raise ValueError(
                f"Payload length {len(self.payload)} does not match "
                f"declared size {self.size}"
            )
        from .signatures import kind_matches

        if not kind_matches(self.signature, self.kind):
            raise ValueError(
                f"Kind {self.kind.label} does not match signature "
                f"0x{self.signature:08X}"
            )
        if self.block is None:
            object.__setattr__(self, "block", RawBlock(self.kind, self.payload))
        elif self.block.kind != self.kind:
            raise ValueError(
                f"Block kind {self.block.kind.label} does not match record "
                f"kind {self.kind.label}"
            )

    @property
    def label(self) -> str:
        return self.kind.label

    @property
    def payload_length(self) -> int:
        return len(self.payload)

    def to_bytes(self) -> bytes:
        """Re-encode the record with its original framing."""
        return HEADER_STRUCT.pack(self.size, self.signature) + self.payload


@dataclass(frozen=True)
class Section:
    """
    Decoded extra-data section.

    ``terminal_value`` is the size field that ended the section. It is
    ``None`` on a partial section attached to a decoding error, because
    the decoder never reached the terminal block.
    """

    records: Tuple[Record, ...] = ()
    terminal_value: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records))
        if self.terminal_value is not None and not (
            0 <= self.terminal_value < TERMINAL_LIMIT
        ):
            raise ValueError(
                f"Terminal value {self.terminal_value} must be below "
                f"{TERMINAL_LIMIT}"
            )

    @classmethod
    def from_records(
        cls, records: List[Record], terminal_value: Optional[int] = None
    ) -> "Section":
        return cls(tuple(records), terminal_value)

    @property
    def is_complete(self) -> bool:
        return self.terminal_value is not None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __getitem__(self, index: int) -> Record:
        return self.records[index]

    def kinds(self) -> List[Kind]:
        return [r.kind for r in self.records]

    def to_bytes(self) -> bytes:
        """
        Re-encode the section: every record, then the terminal value.

        Raises:
            ValueError: If the section is partial (no terminal value).
        """
        if self.terminal_value is None:
            raise ValueError("Cannot encode a partial section")
        body = b"".join(r.to_bytes() for r in self.records)
        return body + U32_STRUCT.pack(self.terminal_value)
