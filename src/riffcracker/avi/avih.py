#!/usr/bin/env python3

from dataclasses import dataclass, replace

from riffcracker.kernel.chunk import Chunk
from riffcracker.kernel.reader import Field
from riffcracker.kernel.structured import RecordLayout

RESERVED_SIZE = 16


@dataclass(frozen=True)
class MainHeader:
    micro_sec_per_frame: int
    max_bytes_per_sec: int
    padding_granularity: int
    flags: int
    total_frames: int
    initial_frames: int
    streams: int
    suggested_buffer_size: int
    width: int
    height: int


AVIH = RecordLayout(
    'avih',
    (
        Field('dword', key='micro_sec_per_frame'),
        Field('dword', key='max_bytes_per_sec'),
        Field('dword', key='padding_granularity'),
        Field('dword', key='flags'),
        Field('dword', key='total_frames'),
        Field('dword', key='initial_frames'),
        Field('dword', key='streams'),
        Field('dword', key='suggested_buffer_size'),
        Field('dword', key='width'),
        Field('dword', key='height'),
        Field('skip', (RESERVED_SIZE,)),
    ),
    MainHeader,
)


def from_bytes(data: bytes) -> MainHeader:
    return AVIH.unpack_from(data)


def to_bytes(header: MainHeader) -> bytes:
    return AVIH.pack(header)


def decode(chunk: Chunk) -> Chunk:
    return replace(chunk, record=from_bytes(chunk.data))
