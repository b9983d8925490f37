import deal

from .buffer import BufferLike


@deal.chain(
    deal.pre(lambda _: _.align >= 1),
    deal.pre(lambda _: _.offset >= 0),
    deal.ensure(lambda _: 0 <= _.result < _.align),
    deal.ensure(lambda _: (_.offset + _.result) % _.align == 0),
    deal.pure,
)
def calc_align(offset: int, align: int) -> int:
    """Calculate difference from given offset to next aligned offset."""
    return (align - offset) % align


@deal.chain(
    deal.pre(lambda _: _.align >= 1),
    deal.pre(lambda _: 0 <= _.pos <= len(_.buffer)),
    deal.ensure(lambda _: _.pos <= _.result <= len(_.buffer)),
    deal.ensure(lambda _: _.result % _.align == 0 or _.result == len(_.buffer)),
    deal.pure,
)
def align_read(buffer: BufferLike, pos: int, align: int = 2) -> int:
    """Align given read position to next aligned position.
    Pad bytes are ignored, a pad missing at the very end of the buffer is tolerated.
    """
    return min(pos + calc_align(pos, align), len(buffer))


@deal.chain(
    deal.pre(lambda _: _.align >= 1),
    deal.ensure(lambda _: _.result.startswith(bytes(_.buffer))),
    deal.ensure(lambda _: len(_.result) % _.align == 0),
    deal.pure,
)
def align_write(buffer: BufferLike, align: int = 2) -> bytes:
    """Align given write stream to next aligned position.
    Pad skipped bytes with zero.
    """
    pos = len(buffer)
    return bytes(buffer) + bytes(calc_align(pos, align))
