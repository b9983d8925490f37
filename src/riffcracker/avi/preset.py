#!/usr/bin/env python3

from riffcracker.kernel.preset import riff
from riffcracker.kernel.registry import (
    ChunkDecoder,
    ListReaderFactory,
    Registry,
    chunk_decoders,
    list_readers,
)

from . import avih, strh
from .hdrl import HeaderListReader
from .movi import MovieDataReader
from .strl import StreamListReader

CHUNKS = {
    'avih': avih.decode,
    'strh': strh.decode,
}

LIST_READERS = {
    'strl': StreamListReader,
    'hdrl': HeaderListReader,
    'movi': MovieDataReader,
}


def register_chunks(registry: Registry[ChunkDecoder] = chunk_decoders) -> None:
    for tag, decoder in CHUNKS.items():
        registry.register(tag, decoder)


def register_list_readers(registry: Registry[ListReaderFactory] = list_readers) -> None:
    for list_type, reader in LIST_READERS.items():
        registry.register(list_type, reader)


def unregister_all() -> None:
    for tag in CHUNKS:
        chunk_decoders.unregister(tag)
    for list_type in LIST_READERS:
        list_readers.unregister(list_type)


register_chunks()
register_list_readers()

avi = riff(align=2)
