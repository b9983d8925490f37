from typing import Iterator

import pytest

from riffcracker.avi.preset import register_chunks, register_list_readers, unregister_all
from riffcracker.kernel.registry import chunk_decoders, list_readers


@pytest.fixture(autouse=True)
def avi_registry() -> Iterator[None]:
    before = dict(chunk_decoders.current), dict(list_readers.current)
    register_chunks()
    register_list_readers()
    yield
    unregister_all()
    for tag, decoder in before[0].items():
        chunk_decoders.register(tag, decoder)
    for list_type, reader in before[1].items():
        list_readers.register(list_type, reader)
