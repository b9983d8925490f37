import io
import os
import sys
from dataclasses import fields, is_dataclass
from typing import IO, Any, Callable, Dict, Iterator, Optional

from parse import parse

from .chunk import Chunk, ListChunk


def iter_chunks(root: Optional[Chunk]) -> Iterator[Chunk]:
    """Iterate descendants of given chunk depth-first, in file order."""
    if not isinstance(root, ListChunk):
        return
    for chunk in root:
        yield chunk
        yield from iter_chunks(chunk)


def find_first(root: Optional[Chunk], predicate: Callable[[Chunk], bool]) -> Optional[Chunk]:
    return next(filter(predicate, iter_chunks(root)), None)


def findall(name: str, root: Optional[Chunk]) -> Iterator[Chunk]:
    if not isinstance(root, ListChunk):
        return
    for c in root.children:
        if parse(name, c.name, case_sensitive=True, evaluate_result=False):
            yield c


def find(name: str, root: Optional[Chunk]) -> Optional[Chunk]:
    return next(findall(name, root), None)


def findpath(path: str, root: Optional[Chunk]) -> Optional[Chunk]:
    path = os.path.normpath(path)
    if not path or path == '.':
        return root
    dirname, basename = os.path.split(path)
    return find(basename, findpath(dirname, root))


def _attribs(chunk: Chunk) -> Dict[str, Any]:
    attribs: Dict[str, Any] = {'size': chunk.size}
    if isinstance(chunk, ListChunk):
        attribs = {'type': chunk.list_type, **attribs}
        if chunk.reader and chunk.reader.summary():
            attribs['summary'] = chunk.reader.summary()
    if is_dataclass(chunk.record):
        attribs.update(
            (attr.name, getattr(chunk.record, attr.name))
            for attr in fields(chunk.record)
        )
    return attribs


def render(chunk: Optional[Chunk], level: int = 0, stream: Optional[IO[str]] = None) -> None:
    if chunk is None:
        return
    # resolved per call, stdout may be redirected
    stream = stream or sys.stdout
    attribs = ''.join(
        f' {key}="{value}"' for key, value in _attribs(chunk).items() if value is not None
    )
    indent = '    ' * level
    children = chunk.children if isinstance(chunk, ListChunk) else ()
    closing = '' if children else ' /'
    print(f'{indent}<{chunk.tag}{attribs}{closing}>', file=stream)
    if children:
        for c in children:
            render(c, level=level + 1, stream=stream)
        print(f'{indent}</{chunk.tag}>', file=stream)


def describe(chunk: Optional[Chunk]) -> str:
    with io.StringIO() as stream:
        render(chunk, stream=stream)
        return stream.getvalue()
