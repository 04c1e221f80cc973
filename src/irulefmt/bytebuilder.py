"""ByteBuilder for O(n) byte accumulation.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated bytes concatenation.

Thread Safety:
ByteBuilder instances are local to each format() call.
No shared mutable state.

"""

from __future__ import annotations


class ByteBuilder:
    """Append-only bytes accumulator.

    Usage:
            >>> bb = ByteBuilder()
            >>> _ = bb.append(b"set ").append(b"x")
            >>> _ = bb.append_line(b" 1")
            >>> bb.build()
            b'set x 1\\n'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        """Initialize empty ByteBuilder."""
        self._parts: list[bytes] = []

    def append(self, data: bytes) -> ByteBuilder:
        """Append bytes to the builder.

        Args:
            data: Bytes to append (empty values are skipped)

        Returns:
            self for method chaining
        """
        if data:
            self._parts.append(data)
        return self

    def append_line(self, data: bytes = b"") -> ByteBuilder:
        """Append bytes followed by a line break.

        Args:
            data: Bytes to append (empty = just the line break)

        Returns:
            self for method chaining
        """
        if data:
            self._parts.append(data)
        self._parts.append(b"\n")
        return self

    def append_repeated(self, data: bytes, count: int) -> ByteBuilder:
        """Append ``data`` ``count`` times (used for indentation)."""
        if data and count > 0:
            self._parts.append(data * count)
        return self

    def build(self) -> bytes:
        """Join all parts into the final byte string."""
        return b"".join(self._parts)
