import struct


def block(signature, payload=b""):
    return struct.pack("<II", 8 + len(payload), signature) + payload


def terminal(value=0):
    return struct.pack("<I", value)


class TrickleStream:
    """Binary stream that returns at most one byte per read call."""

    def __init__(self, data):
        self._data = data
        self._pos = 0

    def read(self, n=-1):
        if self._pos >= len(self._data) or n == 0:
            return b""
        out = self._data[self._pos:self._pos + 1]
        self._pos += 1
        return out
