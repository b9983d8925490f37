#!/usr/bin/env python3

from dataclasses import dataclass

from riffcracker.kernel.chunk import CHUNK_HEADER_SIZE, Chunk
from riffcracker.kernel.reader import Field
from riffcracker.kernel.structured import RecordLayout


@dataclass(frozen=True)
class Compression:
    numeric: int
    fourcc: str


@dataclass(frozen=True)
class VideoFormat:
    size: int
    width: int
    height: int
    planes: int
    bit_count: int
    compression: Compression
    size_image: int
    x_pels_per_meter: int
    y_pels_per_meter: int
    clr_used: int
    clr_important: int


# same 4 bytes read as number and as 4CC
COMPRESSION = RecordLayout(
    'biCompression',
    (
        Field('dword', key='numeric'),
        Field('skip', (-4,)),
        Field('fourcc', key='fourcc'),
    ),
    Compression,
)

BITMAPINFOHEADER = RecordLayout(
    'strf',
    (
        Field('dword', key='size'),
        Field('long', key='width'),
        Field('long', key='height'),
        Field('word', key='planes'),
        Field('word', key='bit_count'),
        Field('record', (COMPRESSION,), key='compression'),
        Field('dword', key='size_image'),
        Field('long', key='x_pels_per_meter'),
        Field('long', key='y_pels_per_meter'),
        Field('dword', key='clr_used'),
        Field('dword', key='clr_important'),
    ),
    VideoFormat,
)


def from_chunk(chunk: Chunk) -> VideoFormat:
    """Decode video format from whole chunk bytes, header included."""
    return BITMAPINFOHEADER.unpack_from(chunk.buffer, offset=CHUNK_HEADER_SIZE)


def to_bytes(fmt: VideoFormat) -> bytes:
    return BITMAPINFOHEADER.pack(fmt)
