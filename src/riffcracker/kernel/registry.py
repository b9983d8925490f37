from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Dict, Generic, Mapping, TypeVar

from .listreader import ListReader
from .settings import CONTAINER_TAGS, _RiffSetting

if TYPE_CHECKING:
    from .chunk import Chunk

T_Entry = TypeVar('T_Entry')

ChunkDecoder = Callable[['Chunk'], 'Chunk']
ListReaderFactory = Callable[[_RiffSetting], ListReader]


class Registry(Generic[T_Entry]):
    """Process-wide table of decoders keyed by 4CC."""

    def __init__(self, default: T_Entry) -> None:
        self.default = default
        self._entries: Dict[str, T_Entry] = {}

    @property
    def current(self) -> Mapping[str, T_Entry]:
        return MappingProxyType(self._entries)

    def register(self, key: str, entry: T_Entry) -> None:
        self._entries[key] = entry

    def unregister(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def get(self, key: str) -> T_Entry:
        return self._entries.get(key, self.default)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


class ChunkRegistry(Registry[ChunkDecoder]):
    def register(self, key: str, entry: ChunkDecoder) -> None:
        if key in CONTAINER_TAGS:
            raise ValueError(f'{key} chunks are always read as lists')
        super().register(key, entry)


def keep_chunk(chunk: 'Chunk') -> 'Chunk':
    return chunk


chunk_decoders = ChunkRegistry(keep_chunk)
list_readers: Registry[ListReaderFactory] = Registry(ListReader)
