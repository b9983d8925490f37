from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Generic, Sequence, TypeVar, cast

from .buffer import BufferLike
from .reader import BufferReader, Field
from .writer import BufferWriter

T_Struct = TypeVar('T_Struct')


class StructuralMismatch(ValueError):
    def __init__(self, name: str, position: int, length: int) -> None:
        super().__init__(
            f'Data after expected end of chunk in {name} (read {position} of {length})',
        )
        self.name = name
        self.position = position
        self.length = length


def _as_values(data: Any) -> Dict[str, Any]:
    return {attr.name: getattr(data, attr.name) for attr in fields(data)}


@dataclass(frozen=True)
class RecordLayout(Generic[T_Struct]):
    """Fixed-layout record declared as a sequence of reader steps."""

    name: str
    _fields: Sequence[Field]
    _factory: Callable[..., T_Struct]

    def unpack(self, reader: BufferReader) -> T_Struct:
        factory = cast(Callable[..., T_Struct], self._factory)
        return factory(**reader.read_structured(self._fields))

    def unpack_from(self, buffer: BufferLike, offset: int = 0) -> T_Struct:
        """Decode a buffer holding exactly one record starting at given offset."""
        reader = BufferReader(buffer)
        reader.skip(offset)
        record = self.unpack(reader)
        if not reader.at_end():
            raise StructuralMismatch(self.name, reader.position, len(reader))
        return record

    def pack_into(self, writer: BufferWriter, data: T_Struct) -> None:
        writer.write_structured(self._fields, _as_values(data))

    def pack(self, data: T_Struct) -> bytes:
        writer = BufferWriter()
        self.pack_into(writer, data)
        return bytes(writer)
