"""Lists of persistence pairs and their ASCII and binary file formats."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from pathlib import Path

_INT64 = struct.Struct("<q")
_PAIR = struct.Struct("<qq")


class PersistencePairs:
    """An ordered list of (birth, death) index pairs."""

    def __init__(self, pairs: Iterable[tuple[int, int]] = ()):
        self._pairs: list[tuple[int, int]] = [(int(b), int(d)) for b, d in pairs]

    def __len__(self) -> int:
        return len(self._pairs)

    def __getitem__(self, index: int) -> tuple[int, int]:
        return self._pairs[index]

    def __setitem__(self, index: int, pair: tuple[int, int]) -> None:
        birth, death = pair
        self._pairs[index] = (int(birth), int(death))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PersistencePairs):
            return NotImplemented
        return sorted(self._pairs) == sorted(other._pairs)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PersistencePairs({self._pairs!r})"

    def append(self, birth: int, death: int) -> None:
        self._pairs.append((int(birth), int(death)))

    def clear(self) -> None:
        self._pairs.clear()

    def sort(self) -> None:
        self._pairs.sort()

    def save_ascii(self, path: str | Path) -> None:
        """Sort the pairs and write the count, then one ``birth death`` line per pair."""
        self.sort()
        lines = [str(len(self._pairs))]
        lines.extend(f"{birth} {death}" for birth, death in self._pairs)
        Path(path).write_text("\n".join(lines) + "\n", encoding="ascii")

    @classmethod
    def load_ascii(cls, path: str | Path) -> PersistencePairs:
        tokens = Path(path).read_text(encoding="ascii").split()
        if not tokens:
            raise ValueError(f"{path}: missing pair count")
        try:
            values = [int(t) for t in tokens]
        except ValueError as exc:
            raise ValueError(f"{path}: non-integer entry") from exc
        count, rest = values[0], values[1:]
        if count < 0 or len(rest) < 2 * count:
            raise ValueError(f"{path}: expected {count} pairs")
        return cls(zip(rest[0 : 2 * count : 2], rest[1 : 2 * count : 2]))

    def save_binary(self, path: str | Path) -> None:
        """Sort the pairs and write little-endian int64 count, births and deaths."""
        self.sort()
        data = bytearray(_INT64.pack(len(self._pairs)))
        for birth, death in self._pairs:
            data += _PAIR.pack(birth, death)
        Path(path).write_bytes(bytes(data))

    @classmethod
    def load_binary(cls, path: str | Path) -> PersistencePairs:
        data = Path(path).read_bytes()
        if len(data) < _INT64.size:
            raise ValueError(f"{path}: missing pair count")
        (count,) = _INT64.unpack_from(data, 0)
        body = data[_INT64.size :]
        if count < 0 or len(body) < count * _PAIR.size:
            raise ValueError(f"{path}: expected {count} pairs")
        return cls(
            _PAIR.unpack_from(body, i * _PAIR.size) for i in range(count)
        )