import pytest

from helpers import block, terminal


@pytest.fixture
def sample_bytes():
    return (
        block(0xA0000003, b"\x01" * 12)
        + block(0xDEADBEEF, b"xyz")
        + block(0xA0000009)
        + terminal(0)
    )
