import logging
from typing import Dict, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from riffcracker.kernel.chunk import Chunk, ListChunk
from riffcracker.kernel.listreader import ListReader
from riffcracker.kernel.settings import _RiffSetting

RECORD_GROUP = 'rec '

COMPRESSED_VIDEO = 'dc'
AUDIO_DATA = 'wb'


class Frame(NamedTuple):
    """Opaque stream data

    data: chunk payload, aliasing the resource buffer

    type: 2 characters type code, e.g. `dc` for compressed video
    """

    data: memoryview
    type: str


class StreamChunkId(NamedTuple):
    stream: int
    type: str


def parse_chunk_id(tag: str) -> Optional[StreamChunkId]:
    """Split `##xx` tag to stream index and type code."""
    prefix, type_code = tag[:2], tag[2:]
    if not (prefix.isascii() and prefix.isdigit()):
        return None
    return StreamChunkId(int(prefix), type_code)


def collect_frames(
    chunk: Chunk, logger: logging.Logger = logging.root
) -> Iterator[Tuple[int, Frame]]:
    """Yield (stream index, frame) pairs for given movi child.

    Record groups are flattened, they add no level to the output.
    """
    if isinstance(chunk, ListChunk):
        if chunk.list_type != RECORD_GROUP:
            logger.debug(f'ignoring nested list {chunk.list_type!r} in movi')
            return
        for child in chunk.children:
            yield from collect_frames(child, logger)
        return
    chunk_id = parse_chunk_id(chunk.tag)
    if chunk_id is None:
        logger.debug(f'ignoring non-stream chunk {chunk.tag!r} in movi')
        return
    yield chunk_id.stream, Frame(chunk.data, chunk_id.type)


class MovieDataReader(ListReader):
    """Reader for `movi` lists: collect stream data by stream index."""

    def __init__(self, cfg: _RiffSetting) -> None:
        super().__init__(cfg)
        self._streams: Dict[int, List[Frame]] = {}

    def on_start(self) -> None:
        super().on_start()
        self._streams = {}

    def on_chunk(self, chunk: Chunk) -> None:
        super().on_chunk(chunk)
        for stream, frame in collect_frames(chunk, self.cfg.logger):
            self._streams.setdefault(stream, []).append(frame)

    @property
    def streams(self) -> Mapping[int, Sequence[Frame]]:
        return self._streams

    def summary(self) -> str:
        return ', '.join(
            f'{stream:02d}: {len(frames)}' for stream, frames in sorted(self.streams.items())
        )
