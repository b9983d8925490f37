#!/usr/bin/env python3

from dataclasses import dataclass, replace

from riffcracker.kernel.chunk import Chunk
from riffcracker.kernel.reader import Field
from riffcracker.kernel.structured import RecordLayout

VIDEO = 'vids'


@dataclass(frozen=True)
class Rect:
    left: int
    top: int
    right: int
    bottom: int


@dataclass(frozen=True)
class StreamHeader:
    type: str
    handler: str
    flags: int
    priority: int
    language: int
    initial_frames: int
    scale: int
    rate: int
    start: int
    length: int
    suggested_buffer_size: int
    quality: int
    sample_size: int
    frame: Rect

    @property
    def frame_rate(self) -> float:
        """Frames (or samples) per second."""
        return self.rate / self.scale if self.scale else 0.0


RECT = RecordLayout(
    'rcFrame',
    (
        Field('word', key='left'),
        Field('word', key='top'),
        Field('word', key='right'),
        Field('word', key='bottom'),
    ),
    Rect,
)

STRH = RecordLayout(
    'strh',
    (
        Field('fourcc', key='type'),
        Field('fourcc', key='handler'),
        Field('dword', key='flags'),
        Field('word', key='priority'),
        Field('word', key='language'),
        Field('dword', key='initial_frames'),
        Field('dword', key='scale'),
        Field('dword', key='rate'),
        Field('dword', key='start'),
        Field('dword', key='length'),
        Field('dword', key='suggested_buffer_size'),
        Field('dword', key='quality'),
        Field('dword', key='sample_size'),
        Field('record', (RECT,), key='frame'),
    ),
    StreamHeader,
)


def from_bytes(data: bytes) -> StreamHeader:
    return STRH.unpack_from(data)


def to_bytes(header: StreamHeader) -> bytes:
    return STRH.pack(header)


def decode(chunk: Chunk) -> Chunk:
    return replace(chunk, record=from_bytes(chunk.data))
