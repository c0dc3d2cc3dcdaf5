"""Additive checksum carried by graph containers.

The checksum is the plain sum of every byte from offset 31 to the end of
the file, wrapped to 32 bits, and stored little-endian at offset 27.
"""

from __future__ import annotations

import struct

import numpy as np

CHECKSUM_OFFSET = 27
CHECKSUM_START = 31

_MASK = 0xFFFFFFFF


def additive_checksum(data: bytes, start: int = 0) -> int:
    """Sum every byte from ``start`` to the end, modulo 2**32."""
    view = np.frombuffer(data, dtype=np.uint8)[start:]
    return int(view.sum(dtype=np.uint64)) & _MASK


def read_checksum(container: bytes) -> int:
    """Return the checksum stored in a container."""
    if len(container) < CHECKSUM_START:
        raise ValueError(
            f"Container too small to hold a checksum ({len(container)} bytes)"
        )
    (value,) = struct.unpack_from("<I", container, CHECKSUM_OFFSET)
    return value


def write_checksum(buf: bytearray) -> int:
    """Compute the container checksum and patch it in place.

    The stored slot lies before the summed range, so the result does not
    depend on what the slot held beforehand.

    Returns:
        The checksum that was written.
    """
    if len(buf) < CHECKSUM_START:
        raise ValueError(
            f"Container too small to hold a checksum ({len(buf)} bytes)"
        )
    value = additive_checksum(buf, CHECKSUM_START)
    struct.pack_into("<I", buf, CHECKSUM_OFFSET, value)
    return value
