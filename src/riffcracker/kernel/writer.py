from typing import TYPE_CHECKING, Any, Iterable, Mapping

from .buffer import BufferLike, OutOfBounds
from .reader import Field

if TYPE_CHECKING:
    from .structured import RecordLayout


class BufferWriter(object):
    """Inverse of BufferReader, each read method has a write counterpart
    taking the value as last argument.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self.position = 0

    def __bytes__(self) -> bytes:
        return bytes(self._buffer)

    def _put(self, data: BufferLike) -> None:
        end = self.position + len(data)
        if end > len(self._buffer):
            self._buffer.extend(bytes(end - len(self._buffer)))
        self._buffer[self.position : end] = data
        self.position = end

    def chars(self, size: int, value: str) -> None:
        data = value.encode('latin-1')
        if len(data) != size:
            raise ValueError(f'expected {size} characters but got {len(data)}')
        self._put(data)

    def uint(self, size: int, value: int) -> None:
        self._put(value.to_bytes(size, byteorder='little', signed=False))

    def sint(self, size: int, value: int) -> None:
        self._put(value.to_bytes(size, byteorder='little', signed=True))

    def skip(self, size: int) -> None:
        if self.position + size < 0:
            raise OutOfBounds(self.position + size, -size, len(self._buffer))
        if size > 0:
            end = self.position + size
            if end > len(self._buffer):
                self._buffer.extend(bytes(end - len(self._buffer)))
        self.position += size

    def fourcc(self, value: str) -> None:
        self.chars(4, value)

    def word(self, value: int) -> None:
        self.uint(2, value)

    def dword(self, value: int) -> None:
        self.uint(4, value)

    def long(self, value: int) -> None:
        self.sint(4, value)

    def record(self, layout: 'RecordLayout[Any]', value: Any) -> None:
        layout.pack_into(self, value)

    def write_structured(self, fields: Iterable[Field], values: Mapping[str, Any]) -> None:
        for field in fields:
            method = getattr(self, field.method)
            if field.key is None:
                method(*field.args)
            else:
                method(*field.args, values[field.key])
