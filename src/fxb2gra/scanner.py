"""Forward search for a 4-byte signature in an in-memory buffer."""

from __future__ import annotations

SIGNATURE_SIZE = 4


class SignatureNotFound(ValueError):
    """Raised when a signature does not occur in the scanned range."""

    def __init__(self, pattern: bytes, start: int, stop: int):
        self.pattern = pattern
        self.start = start
        self.stop = stop
        super().__init__(
            f"Signature {pattern!r} not found between offsets {start} and {stop}"
        )


def find_first(
    data: bytes,
    pattern: bytes,
    start: int = 0,
    stop: int | None = None,
) -> int:
    """Find the first occurrence of a 4-byte pattern.

    Candidate positions are tested one byte at a time from ``start``.
    Only matches that begin strictly before ``stop`` count; by default
    that is every position that still leaves room for the whole pattern.

    Args:
        data: Buffer to scan.
        pattern: Exactly 4 literal bytes.
        start: First offset to test.
        stop: Exclusive upper bound on the offset where a match may begin.

    Returns:
        The offset just past the match (match start + 4).

    Raises:
        ValueError: If the pattern is not 4 bytes long.
        SignatureNotFound: If no match begins in ``[start, stop)``.
    """
    if len(pattern) != SIGNATURE_SIZE:
        raise ValueError(
            f"Signature must be {SIGNATURE_SIZE} bytes, got {len(pattern)}"
        )

    last = len(data) - SIGNATURE_SIZE + 1
    if stop is None or stop > last:
        stop = last
    start = max(start, 0)

    pos = start
    while pos < stop:
        if data[pos] == pattern[0] and data[pos : pos + SIGNATURE_SIZE] == pattern:
            return pos + SIGNATURE_SIZE
        pos += 1

    raise SignatureNotFound(bytes(pattern), start, max(stop, start))
