from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Callable, Mapping, Optional, Union

from riffcracker.kernel.chunk import Chunk
from riffcracker.kernel.listreader import ListReader, SemanticMismatch
from riffcracker.kernel.settings import _RiffSetting

from . import strf
from .strh import VIDEO, StreamHeader
from .strf import VideoFormat

StreamFormat = Union[VideoFormat, Chunk]


class Phase(Enum):
    EXPECT_HEADER = auto()
    EXPECT_FORMAT = auto()
    DONE = auto()


@dataclass(frozen=True)
class StreamListState:
    phase: Phase = Phase.EXPECT_HEADER
    header: Optional[StreamHeader] = None
    format: Optional[StreamFormat] = None


def expect_header(state: StreamListState, chunk: Chunk) -> StreamListState:
    if chunk.tag != 'strh' or not isinstance(chunk.record, StreamHeader):
        return state
    return replace(state, phase=Phase.EXPECT_FORMAT, header=chunk.record)


def expect_format(state: StreamListState, chunk: Chunk) -> StreamListState:
    if chunk.tag != 'strf':
        return state
    assert state.header
    # only video formats have a fixed layout
    fmt = strf.from_chunk(chunk) if state.header.type == VIDEO else chunk
    return replace(state, phase=Phase.DONE, format=fmt)


def ignore_chunk(state: StreamListState, chunk: Chunk) -> StreamListState:
    return state


STEPS: Mapping[Phase, Callable[[StreamListState, Chunk], StreamListState]] = {
    Phase.EXPECT_HEADER: expect_header,
    Phase.EXPECT_FORMAT: expect_format,
}


def step(state: StreamListState, chunk: Chunk) -> StreamListState:
    return STEPS.get(state.phase, ignore_chunk)(state, chunk)


class StreamListReader(ListReader):
    """Reader for `strl` lists: stream header followed by stream format."""

    def __init__(self, cfg: _RiffSetting) -> None:
        super().__init__(cfg)
        self.state = StreamListState()

    def on_start(self) -> None:
        super().on_start()
        self.state = StreamListState()

    def on_chunk(self, chunk: Chunk) -> None:
        super().on_chunk(chunk)
        self.state = step(self.state, chunk)

    def on_end(self) -> None:
        if self.state.phase != Phase.DONE:
            self.warn(SemanticMismatch('strl', 'stream list finished without strh and strf'))

    @property
    def header(self) -> Optional[StreamHeader]:
        return self.state.header

    @property
    def format(self) -> Optional[StreamFormat]:
        return self.state.format

    def summary(self) -> str:
        if not self.header:
            return ''
        text = f'{self.header.type} ({self.header.handler}) {self.header.frame_rate:g}/s'
        if isinstance(self.format, VideoFormat):
            text += f' {self.format.width}x{self.format.height}@{self.format.bit_count}'
        return text
