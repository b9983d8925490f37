from dataclasses import dataclass
from typing import Callable, Iterator, Mapping, Optional, Sequence, Tuple, Type

from riffcracker.kernel.buffer import BufferLike
from riffcracker.kernel.chunk import Chunk, ListChunk
from riffcracker.kernel.listreader import ListReader
from riffcracker.utils.fileio import read_file

from .avih import MainHeader
from .hdrl import HeaderListReader
from .movi import Frame, MovieDataReader
from .preset import avi
from .strf import VideoFormat
from .strh import VIDEO, StreamHeader
from .strl import StreamFormat, StreamListReader


class MissingListError(ValueError):
    def __init__(self, list_type: str) -> None:
        super().__init__(f'Missing {list_type} list in resource')
        self.list_type = list_type


@dataclass(frozen=True)
class StreamDescriptor:
    header: Optional[StreamHeader]
    format: Optional[StreamFormat]

    @property
    def type(self) -> Optional[str]:
        return self.header and self.header.type

    @property
    def handler(self) -> Optional[str]:
        return self.header and self.header.handler

    @property
    def frame_rate(self) -> Optional[float]:
        return self.header and self.header.frame_rate

    @property
    def video(self) -> Optional[VideoFormat]:
        return self.format if isinstance(self.format, VideoFormat) else None

    @property
    def width(self) -> Optional[int]:
        return self.video and self.video.width

    @property
    def height(self) -> Optional[int]:
        return self.video and self.video.height

    @property
    def bit_count(self) -> Optional[int]:
        return self.video and self.video.bit_count


@dataclass(frozen=True)
class HeaderList:
    main_header: Optional[MainHeader]
    streams: Sequence[StreamDescriptor]


@dataclass(frozen=True)
class AviDescriptor:
    header: HeaderList
    movie: Mapping[int, Sequence[Frame]]

    def video_streams(self) -> Iterator[Tuple[int, StreamDescriptor, Sequence[Frame]]]:
        for idx, stream in enumerate(self.header.streams):
            if stream.type == VIDEO:
                yield idx, stream, self.movie.get(idx, ())


def has_reader(reader_type: Type[ListReader]) -> Callable[[Chunk], bool]:
    def predicate(chunk: Chunk) -> bool:
        return isinstance(chunk, ListChunk) and isinstance(chunk.reader, reader_type)

    return predicate


def describe_stream(reader: StreamListReader) -> StreamDescriptor:
    return StreamDescriptor(reader.header, reader.format)


def parse(root: Chunk) -> AviDescriptor:
    hdrl = avi.find_first(root, has_reader(HeaderListReader))
    if not isinstance(hdrl, ListChunk) or not isinstance(hdrl.reader, HeaderListReader):
        raise MissingListError('hdrl')
    header = HeaderList(
        hdrl.reader.main_header,
        [describe_stream(stream) for stream in hdrl.reader.streams],
    )

    movi = avi.find_first(root, has_reader(MovieDataReader))
    if not isinstance(movi, ListChunk) or not isinstance(movi.reader, MovieDataReader):
        hdrl.reader.cfg.logger.warning(MissingListError('movi'))
        return AviDescriptor(header, {})
    return AviDescriptor(header, movi.reader.streams)


def from_bytes(resource: BufferLike, skip_junk: bool = False) -> Chunk:
    return avi(skip_junk=skip_junk).read_chunk(resource)


def from_path(path: str, skip_junk: bool = False) -> Chunk:
    return from_bytes(read_file(path), skip_junk=skip_junk)


def load(resource: BufferLike, skip_junk: bool = False) -> AviDescriptor:
    return parse(from_bytes(resource, skip_junk=skip_junk))
