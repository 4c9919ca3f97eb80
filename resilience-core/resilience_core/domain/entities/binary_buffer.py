from __future__ import annotations

from typing import Iterable, Iterator, Union

BytesLike = Union[bytes, bytearray, memoryview]


class BinaryBuffer:
    """Fixed-length byte sequence.

    Contents may be overwritten in place (so a caller-owned buffer can be
    filled with random bytes) but the length is set at construction and never
    changes. It has no text encode/decode surface.
    """

    __slots__ = ("_data",)

    def __init__(self, data: BytesLike | Iterable[int] = b""):
        if isinstance(data, (bytes, bytearray, memoryview)):
            self._data = bytearray(data)
        else:
            self._data = bytearray(_checked_octets(data))

    @classmethod
    def from_bytes(cls, data: BytesLike | Iterable[int]) -> "BinaryBuffer":
        return cls(data)

    @classmethod
    def alloc(cls, size: int) -> "BinaryBuffer":
        if size < 0:
            raise ValueError("size must be non-negative")
        return cls(bytes(size))

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    def to_list(self) -> list[int]:
        return list(self._data)

    def hex(self) -> str:
        return self._data.hex()

    def view(self) -> memoryview:
        # writable, but fixed-size: memoryview cannot resize the backing array
        return memoryview(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return BinaryBuffer(self._data[index])
        return self._data[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            start, stop, step = index.indices(len(self._data))
            octets = bytes(value) if isinstance(value, (bytes, bytearray, memoryview, BinaryBuffer)) else bytes(_checked_octets(value))
            if len(range(start, stop, step)) != len(octets):
                raise ValueError("BinaryBuffer length is fixed; slice assignment must not resize")
            self._data[index] = octets
            return
        self._data[index] = value

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __eq__(self, other) -> bool:
        if isinstance(other, BinaryBuffer):
            return self._data == other._data
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self._data == bytes(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"BinaryBuffer({self.hex()!r})"


def _checked_octets(values: Iterable[int]) -> list[int]:
    octets = list(values)
    for value in octets:
        if not isinstance(value, int) or not 0 <= value <= 255:
            raise ValueError(f"byte values must be ints in range 0..255, got {value!r}")
    return octets
