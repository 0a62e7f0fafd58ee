import io
import random

import pytest

from lnkextra.analysis import (
    BlockKind,
    MalformedRecordError,
    RawBlock,
    Record,
    Section,
    ShortReadError,
    TrailingDataError,
    UnknownKind,
    decode_extra_data,
    decode_extra_data_bytes,
    encode_extra_data,
)

from helpers import TrickleStream, block, terminal


def test_terminal_only():
    section = decode_extra_data_bytes(bytes.fromhex("03000000"))
    assert len(section) == 0
    assert section.terminal_value == 3
    assert section.is_complete


def test_single_empty_block():
    raw = bytes.fromhex("08000000010000a0") + terminal(0)
    section = decode_extra_data_bytes(raw)
    assert len(section) == 1
    rec = section[0]
    assert rec.size == 8
    assert rec.signature == 0xA0000001
    assert rec.kind is BlockKind.ENVIRONMENT_VARIABLE
    assert rec.payload == b""
    assert rec.block == RawBlock(BlockKind.ENVIRONMENT_VARIABLE, b"")


def test_records_in_stream_order(sample_bytes):
    section = decode_extra_data_bytes(sample_bytes)
    assert [r.label for r in section] == [
        "TrackerDataBlock",
        "Signature Not Found - deadbeef",
        "PropertyStoreDataBlock",
    ]
    assert section[0].payload == b"\x01" * 12
    assert section[1].kind == UnknownKind(0xDEADBEEF)
    assert section[1].payload == b"xyz"
    assert section.terminal_value == 0


@pytest.mark.parametrize("n", [0, 1, 5, 40])
def test_n_blocks_with_terminal(n):
    rng = random.Random(n)
    payloads = [bytes(rng.randrange(256) for _ in range(rng.randrange(20)))
                for _ in range(n)]
    raw = b"".join(block(0xA0000001 + (i % 3), p)
                   for i, p in enumerate(payloads)) + terminal(2)
    section = decode_extra_data_bytes(raw)
    assert len(section) == n
    assert [r.payload for r in section] == payloads
    assert section.terminal_value == 2


def test_round_trip(sample_bytes):
    section = decode_extra_data_bytes(sample_bytes)
    assert encode_extra_data(section) == sample_bytes


def test_malformed_size():
    with pytest.raises(MalformedRecordError) as excinfo:
        decode_extra_data_bytes(bytes.fromhex("05000000"))
    assert excinfo.value.size == 5
    assert len(excinfo.value.section) == 0
    assert not excinfo.value.section.is_complete


def test_size_four_is_malformed_not_terminal():
    with pytest.raises(MalformedRecordError) as excinfo:
        decode_extra_data_bytes(bytes.fromhex("04000000"))
    assert excinfo.value.size == 4


def test_huge_declared_size_on_short_stream():
    raw = bytes.fromhex("ffffffff030000a0") + b"abc"
    with pytest.raises(ShortReadError) as excinfo:
        decode_extra_data_bytes(raw)
    assert excinfo.value.phase == "payload"
    assert excinfo.value.expected == 0xFFFFFFFF - 8
    assert excinfo.value.received == 3


def test_malformed_after_good_block_keeps_partial():
    raw = block(0xA0000002, b"ab") + bytes.fromhex("07000000")
    with pytest.raises(MalformedRecordError) as excinfo:
        decode_extra_data_bytes(raw)
    partial = excinfo.value.section
    assert [r.kind for r in partial] == [BlockKind.CONSOLE]
    assert partial.terminal_value is None


def test_truncated_payload():
    raw = bytes.fromhex("10000000030000a0") + b"\x00" * 5
    with pytest.raises(ShortReadError) as excinfo:
        decode_extra_data_bytes(raw)
    err = excinfo.value
    assert err.phase == "payload"
    assert err.expected == 8
    assert err.received == 5
    assert "reading payload" in str(err)
    assert len(err.section) == 0


@pytest.mark.parametrize("raw,phase", [
    (b"", "size"),
    (b"\x08\x00", "size"),
    (bytes.fromhex("08000000"), "signature"),
    (bytes.fromhex("0800000001"), "signature"),
])
def test_short_header_reads(raw, phase):
    with pytest.raises(ShortReadError) as excinfo:
        decode_extra_data_bytes(raw)
    assert excinfo.value.phase == phase


def test_missing_terminal_keeps_partial(sample_bytes):
    with pytest.raises(ShortReadError) as excinfo:
        decode_extra_data_bytes(sample_bytes[:-4])
    assert excinfo.value.phase == "size"
    assert len(excinfo.value.section) == 3


def test_trailing_bytes_left_unread():
    stream = io.BytesIO(block(0xA0000008, b"s") + terminal(1) + b"TAIL")
    section = decode_extra_data(stream)
    assert section.terminal_value == 1
    assert stream.read() == b"TAIL"
    assert not stream.closed


def test_strict_rejects_trailing_bytes():
    raw = block(0xA0000008) + terminal(0) + b"\x00"
    with pytest.raises(TrailingDataError) as excinfo:
        decode_extra_data_bytes(raw, strict=True)
    assert len(excinfo.value.section) == 1
    assert excinfo.value.section.terminal_value == 0


def test_strict_peeks_buffered_stream():
    raw = block(0xA0000008) + terminal(0) + b"TAIL"
    stream = io.BufferedReader(io.BytesIO(raw))
    with pytest.raises(TrailingDataError):
        decode_extra_data(stream, strict=True)
    assert stream.read() == b"TAIL"


def test_strict_accepts_exact_section():
    section = decode_extra_data_bytes(block(0xA0000008) + terminal(0),
                                      strict=True)
    assert len(section) == 1


def test_short_reads_from_stream_are_retried(sample_bytes):
    section = decode_extra_data(TrickleStream(sample_bytes))
    assert len(section) == 3
    assert section[0].payload == b"\x01" * 12


def test_record_rejects_inconsistent_size():
    with pytest.raises(ValueError):
        Record(4, 0xA0000001, BlockKind.ENVIRONMENT_VARIABLE, b"")
    with pytest.raises(ValueError):
        Record(10, 0xA0000001, BlockKind.ENVIRONMENT_VARIABLE, b"a")


def test_record_rejects_kind_not_matching_signature():
    with pytest.raises(ValueError):
        Record(8, 0xA0000001, BlockKind.SHIM, b"")
    with pytest.raises(ValueError):
        Record(8, 0xA0000001, UnknownKind(0xA0000002), b"")
    rec = Record(8, 0xDEADBEEF, UnknownKind(0xDEADBEEF), b"")
    assert rec.label == "Signature Not Found - deadbeef"


def test_record_rejects_block_of_another_kind():
    with pytest.raises(ValueError):
        Record(8, 0xA0000001, BlockKind.ENVIRONMENT_VARIABLE, b"",
               block=RawBlock(BlockKind.SHIM, b""))


def test_section_rejects_terminal_value_out_of_range():
    with pytest.raises(ValueError):
        Section((), 4)
    with pytest.raises(ValueError):
        Section((), -1)
    rec = Record(8, 0xA0000008, BlockKind.SHIM, b"")
    section = Section([rec], 3)
    assert section.records == (rec,)
    assert decode_extra_data_bytes(encode_extra_data(section)) == section


def test_partial_section_cannot_be_encoded():
    with pytest.raises(ValueError):
        encode_extra_data(Section())


def test_section_is_immutable(sample_bytes):
    section = decode_extra_data_bytes(sample_bytes)
    with pytest.raises(AttributeError):
        section.terminal_value = 1
    with pytest.raises(AttributeError):
        section[0].payload = b""
