from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Callable, Mapping, Optional, Tuple

from riffcracker.kernel.chunk import Chunk, ListChunk
from riffcracker.kernel.listreader import ListReader, SemanticMismatch
from riffcracker.kernel.settings import _RiffSetting

from .avih import MainHeader
from .strl import StreamListReader


class Phase(Enum):
    EXPECT_MAIN_HEADER = auto()
    EXPECT_STREAMS = auto()
    DONE = auto()


@dataclass(frozen=True)
class HeaderListState:
    phase: Phase = Phase.EXPECT_MAIN_HEADER
    main_header: Optional[MainHeader] = None
    remaining: int = 0
    streams: Tuple[StreamListReader, ...] = ()


def _phase(remaining: int) -> Phase:
    return Phase.DONE if remaining == 0 else Phase.EXPECT_STREAMS


def expect_main_header(state: HeaderListState, chunk: Chunk) -> HeaderListState:
    if not isinstance(chunk.record, MainHeader):
        return state
    remaining = chunk.record.streams
    return replace(
        state,
        phase=_phase(remaining),
        main_header=chunk.record,
        remaining=remaining,
    )


def expect_streams(state: HeaderListState, chunk: Chunk) -> HeaderListState:
    # anything but stream lists is tolerated between streams
    if not (isinstance(chunk, ListChunk) and isinstance(chunk.reader, StreamListReader)):
        return state
    remaining = state.remaining - 1
    return replace(
        state,
        phase=_phase(remaining),
        remaining=remaining,
        streams=(*state.streams, chunk.reader),
    )


STEPS: Mapping[Phase, Callable[[HeaderListState, Chunk], HeaderListState]] = {
    Phase.EXPECT_MAIN_HEADER: expect_main_header,
    Phase.EXPECT_STREAMS: expect_streams,
    # extra streams are kept, the count mismatch is reported at the end
    Phase.DONE: expect_streams,
}


def step(state: HeaderListState, chunk: Chunk) -> HeaderListState:
    return STEPS[state.phase](state, chunk)


class HeaderListReader(ListReader):
    """Reader for `hdrl` lists: main header followed by one `strl` per stream."""

    def __init__(self, cfg: _RiffSetting) -> None:
        super().__init__(cfg)
        self.state = HeaderListState()

    def on_start(self) -> None:
        super().on_start()
        self.state = HeaderListState()

    def on_chunk(self, chunk: Chunk) -> None:
        super().on_chunk(chunk)
        self.state = step(self.state, chunk)

    def on_end(self) -> None:
        if self.state.phase == Phase.EXPECT_MAIN_HEADER:
            self.warn(SemanticMismatch('hdrl', 'header list finished without avih'))
        elif self.state.remaining:
            self.warn(
                SemanticMismatch(
                    'hdrl',
                    f'Stream count does not match with actual count: {self.state.remaining}',
                )
            )
        elif not self.state.streams:
            self.warn(SemanticMismatch('hdrl', 'header list declares no streams'))

    @property
    def main_header(self) -> Optional[MainHeader]:
        return self.state.main_header

    @property
    def streams(self) -> Tuple[StreamListReader, ...]:
        return self.state.streams

    def summary(self) -> str:
        return f'{len(self.streams)} stream(s)'
