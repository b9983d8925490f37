from typing import TYPE_CHECKING, Any, Dict, Iterable, NamedTuple, Optional, Tuple

from .buffer import BufferLike, check_bounds

if TYPE_CHECKING:
    from .structured import RecordLayout


class Field(NamedTuple):
    """Single step of a structured read.

    method: name of the reader method to invoke

    args: positional arguments for the method

    key: output key, steps without a key only consume bytes
    """

    method: str
    args: Tuple[Any, ...] = ()
    key: Optional[str] = None


class BufferReader(object):
    """Sequential little-endian reader over an immutable buffer."""

    def __init__(self, buffer: BufferLike) -> None:
        self._buffer = memoryview(buffer)
        self.position = 0

    def __len__(self) -> int:
        return len(self._buffer)

    def _take(self, size: int) -> memoryview:
        check_bounds(self._buffer, self.position, size)
        data = self._buffer[self.position : self.position + size]
        self.position += size
        return data

    def chars(self, size: int) -> str:
        return bytes(self._take(size)).decode('latin-1')

    def uint(self, size: int) -> int:
        return int.from_bytes(self._take(size), byteorder='little', signed=False)

    def sint(self, size: int) -> int:
        return int.from_bytes(self._take(size), byteorder='little', signed=True)

    def skip(self, size: int) -> None:
        if size >= 0:
            check_bounds(self._buffer, self.position, size)
        else:
            check_bounds(self._buffer, self.position + size, -size)
        self.position += size

    def fourcc(self) -> str:
        return self.chars(4)

    def word(self) -> int:
        return self.uint(2)

    def dword(self) -> int:
        return self.uint(4)

    def long(self) -> int:
        return self.sint(4)

    def record(self, layout: 'RecordLayout[Any]') -> Any:
        return layout.unpack(self)

    def read_structured(self, fields: Iterable[Field]) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for field in fields:
            value = getattr(self, field.method)(*field.args)
            if field.key is not None:
                result[field.key] = value
        return result

    def at_end(self) -> bool:
        return self.position == len(self._buffer)
