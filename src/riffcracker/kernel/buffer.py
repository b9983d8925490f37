from dataclasses import dataclass
from typing import Union

import deal

BufferLike = Union[bytes, bytearray, memoryview]


class OutOfBounds(EOFError):
    def __init__(self, offset: int, size: int, length: int) -> None:
        super().__init__(
            f'Reading {size} bytes at offset {offset} exceeds buffer of size {length}',
        )
        self.offset = offset
        self.size = size
        self.length = length


class NegativeSliceError(ValueError):
    def __init__(self, offset: int, size: int) -> None:
        super().__init__(
            f'Expected non-negative slice values, got offset={offset} size={size}',
        )
        self.size = size
        self.offset = offset


@deal.chain(
    deal.raises(OutOfBounds),
    deal.reason(
        OutOfBounds,
        lambda _: _.offset < 0 or _.size < 0 or _.offset + _.size > len(_.buffer),
    ),
    deal.has(),
)
def check_bounds(buffer: BufferLike, offset: int, size: int) -> None:
    if offset < 0 or size < 0 or offset + size > len(buffer):
        raise OutOfBounds(offset, size, len(buffer))


@deal.chain(
    deal.raises(OutOfBounds),
    deal.ensure(lambda _: len(_.result) == _.size),
    deal.has(),
)
def splice(buffer: BufferLike, offset: int, size: int) -> memoryview:
    """Slice `size` bytes at `offset` without copying."""
    check_bounds(buffer, offset, size)
    return memoryview(buffer)[offset : offset + size]


@dataclass(frozen=True)
class Splicer(object):
    offset: int
    size: int

    def __call__(self, buffer: BufferLike) -> memoryview:
        return splice(buffer, self.offset, self.size)

    def __post_init__(self) -> None:
        if self.offset < 0 or self.size < 0:
            raise NegativeSliceError(self.offset, self.size)
