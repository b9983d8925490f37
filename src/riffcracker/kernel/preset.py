from dataclasses import dataclass, replace
from typing import Any, TypeVar

from . import chunk, settings, tree

_SettingT = TypeVar('_SettingT', bound='_DefaultOverride')


@dataclass(frozen=True)
class _DefaultOverride(object):
    def __call__(self: _SettingT, **kwargs: Any) -> _SettingT:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class _RiffPreset(settings._RiffSetting, _DefaultOverride):

    # static pass through
    mktag = staticmethod(chunk.mktag)
    mklist = staticmethod(chunk.mklist)
    write_chunks = staticmethod(chunk.write_chunks)
    iter_chunks = staticmethod(tree.iter_chunks)
    find_first = staticmethod(tree.find_first)
    find = staticmethod(tree.find)
    findall = staticmethod(tree.findall)
    findpath = staticmethod(tree.findpath)
    render = staticmethod(tree.render)
    describe = staticmethod(tree.describe)

    # isort: off
    from .chunk import (
        read_chunk,
        read_chunks,
    )
    # isort: on


riff = _RiffPreset()
