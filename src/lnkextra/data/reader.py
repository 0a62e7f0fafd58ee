"""
Extra-Data Section Reader (Imperative Shell)

Boundary called by the top-level Shell Link loader once the preceding
sections have been read and the stream sits at the first byte of the
extra-data region.

Unlike the functional core, the reader does not raise on malformed input.
It returns ``(section, error)``: on failure ``section`` holds the blocks
decoded before the error and ``error`` is an ``ExtraDataSectionError``
whose message is prefixed with ``"extra-data section: "`` and whose
``__cause__`` is the underlying decoder error. Whether a partial section
is still useful is the caller's decision.

Package Location: src/lnkextra/data/reader.py
"""

import io
import logging
from typing import BinaryIO, Optional, Tuple

from ..analysis import decoders
from ..analysis.records import Section

logger = logging.getLogger(__name__)

SECTION_CONTEXT = "extra-data section"


class ExtraDataSectionError(Exception):
    """
    Section-level wrapper around an extra-data decoding error.

    Attributes:
        section: Partial section decoded before the failure.
    """

    def __init__(self, cause: decoders.ExtraDataError):
        super().__init__(f"{SECTION_CONTEXT}: {cause}")
        self.section = cause.section
        self.__cause__ = cause

    @property
    def phase(self) -> Optional[str]:
        """Framing phase of a short read, else ``None``."""
        return getattr(self.__cause__, "phase", None)


def read_extra_data(
    stream: BinaryIO,
    strict: bool = False,
) -> Tuple[Section, Optional[ExtraDataSectionError]]:
    """
    Read the extra-data section from *stream*.

    Args:
        stream: Binary stream positioned at the start of the section. The
            stream is borrowed: it is advanced but never closed.
        strict: Reject bytes following the terminal block.

    Returns:
        ``(section, None)`` on success, ``(partial_section, error)`` on
        failure.

    Example:
        >>> section, err = read_extra_data(fh)
        >>> if err is not None:
        ...     log.warning(str(err))   # partial section still usable
    """
    try:
        section = decoders.decode_extra_data(stream, strict=strict)
    except decoders.ExtraDataError as exc:
        error = ExtraDataSectionError(exc)
        logger.warning(
            str(error),
            extra={
                "error_type": type(exc).__name__,
                "blocks_decoded": len(exc.section),
            },
        )
        return error.section, error

    logger.info(
        f"Decoded extra-data section: {len(section)} block(s)",
        extra={
            "blocks_decoded": len(section),
            "terminal_value": section.terminal_value,
        },
    )
    return section, None


def read_extra_data_bytes(
    data: bytes,
    strict: bool = False,
) -> Tuple[Section, Optional[ExtraDataSectionError]]:
    """In-memory variant of ``read_extra_data``."""
    return read_extra_data(io.BytesIO(data), strict=strict)
