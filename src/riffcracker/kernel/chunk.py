from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, NamedTuple, Optional, Sequence, Union

from .align import align_read, align_write
from .buffer import BufferLike, Splicer, check_bounds, splice
from .listreader import ListReader
from .reader import BufferReader
from .registry import chunk_decoders, list_readers
from .settings import CONTAINER_TAGS, JUNK_TAG, _RiffSetting

CHUNK_HEADER_SIZE = 8
LIST_TYPE_SIZE = 4


class ChunkHeader(NamedTuple):
    tag: str
    size: int


@dataclass(frozen=True)
class Chunk(object):
    """Tagged chunk aliasing its bytes in the resource buffer

    tag: 4CC header

    size: payload size declared in header

    buffer: whole chunk, including the 8 bytes header

    record: decoded fixed-layout record, if a decoder is registered for the tag
    """

    tag: str
    size: int
    buffer: memoryview = field(repr=False)
    record: Optional[Any] = None

    @property
    def name(self) -> str:
        return self.tag

    @property
    def data(self) -> memoryview:
        return Splicer(CHUNK_HEADER_SIZE, self.size)(self.buffer)

    def __len__(self) -> int:
        return len(self.buffer)

    def __bytes__(self) -> bytes:
        return bytes(self.buffer)

    def __repr__(self) -> str:
        return f'Chunk<{self.tag}>[{self.size}]'


@dataclass(frozen=True, repr=False)
class ListChunk(Chunk):
    list_type: str = ''
    reader: Optional[ListReader] = None

    @property
    def name(self) -> str:
        return self.list_type

    @property
    def children(self) -> Sequence[Chunk]:
        return self.reader.children if self.reader else ()

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.children)

    def __repr__(self) -> str:
        return f'ListChunk<{self.tag}:{self.list_type}>[{self.size}]'


def untag(buffer: BufferLike, offset: int = 0) -> ChunkHeader:
    """Peek chunk header at given offset."""
    reader = BufferReader(splice(buffer, offset, CHUNK_HEADER_SIZE))
    return ChunkHeader(reader.fourcc(), reader.dword())


def read_chunk(cfg: _RiffSetting, buffer: BufferLike) -> Chunk:
    """Read chunk starting at the beginning of given buffer.

    LIST and RIFF chunks are read recursively, other chunks are passed
    through the decoder registered for their tag.
    """
    tag, size = untag(buffer)
    data = splice(buffer, 0, CHUNK_HEADER_SIZE + size)
    if tag in CONTAINER_TAGS:
        return read_list(cfg, ChunkHeader(tag, size), data)
    return chunk_decoders.get(tag)(Chunk(tag, size, data))


def read_list(cfg: _RiffSetting, header: ChunkHeader, buffer: memoryview) -> ListChunk:
    data = Splicer(CHUNK_HEADER_SIZE, header.size)(buffer)
    list_type = BufferReader(data).fourcc()
    reader = list_readers.get(list_type)(cfg)
    reader.on_start()
    for chunk in read_chunks(cfg, data, offset=LIST_TYPE_SIZE):
        reader.on_chunk(chunk)
    reader.on_end()
    return ListChunk(header.tag, header.size, buffer, None, list_type, reader)


def read_chunks(cfg: _RiffSetting, buffer: BufferLike, offset: int = 0) -> Iterator[Chunk]:
    """Read all chunks from given bytes."""
    data = memoryview(buffer)
    max_size = len(data)
    while offset < max_size:
        tag, size = untag(data, offset)
        end = offset + CHUNK_HEADER_SIZE + size
        if cfg.skip_junk and tag == JUNK_TAG:
            check_bounds(data, offset, end - offset)
        else:
            yield read_chunk(cfg, splice(data, offset, end - offset))
        offset = align_read(data, end, align=cfg.align)


def mktag(tag: str, data: BufferLike) -> bytes:
    """Create chunk bytes from given tag and data."""
    return tag.encode('latin-1') + len(data).to_bytes(4, byteorder='little') + bytes(data)


def write_chunks(chunks: Iterable[Union[bytes, Chunk]], align: int = 2) -> bytes:
    """Write chunks sequence to bytes with given data alignment."""
    stream = bytearray()
    for chunk in chunks:
        stream += align_write(bytes(chunk), align=align)
    return bytes(stream)


def mklist(tag: str, list_type: str, chunks: Iterable[Union[bytes, Chunk]]) -> bytes:
    """Create container chunk bytes from given list type and children."""
    return mktag(tag, list_type.encode('latin-1') + write_chunks(chunks))
