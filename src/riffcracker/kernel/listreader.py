from typing import TYPE_CHECKING, List

from .settings import _RiffSetting

if TYPE_CHECKING:
    from .chunk import Chunk


class SemanticMismatch(ValueError):
    def __init__(self, list_type: str, message: str) -> None:
        super().__init__(f'{list_type}: {message}')
        self.list_type = list_type


class ListReader(object):
    """Consumer of the chunks contained in a list chunk

    Lifecycle: on_start, on_chunk for every child in file order, on_end.

    The default reader only preserves children in order.
    """

    def __init__(self, cfg: _RiffSetting) -> None:
        self.cfg = cfg
        self.children: List['Chunk'] = []
        self.warnings: List[SemanticMismatch] = []

    def on_start(self) -> None:
        self.children = []
        self.warnings = []

    def on_chunk(self, chunk: 'Chunk') -> None:
        self.children.append(chunk)

    def on_end(self) -> None:
        pass

    def warn(self, exc: SemanticMismatch) -> None:
        if self.cfg.strict:
            raise exc
        self.cfg.logger.warning(exc)
        self.warnings.append(exc)

    def summary(self) -> str:
        return ''
