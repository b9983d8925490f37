import logging
from dataclasses import dataclass

CONTAINER_TAGS = frozenset({'RIFF', 'LIST'})
JUNK_TAG = 'JUNK'


@dataclass(frozen=True)
class _RiffSetting(object):
    """Setting for reading RIFF resources

    align: int (default 2) -
        data alignment for chunk start offsets.

    skip_junk: if set to True, JUNK chunks are dropped before reaching list readers

    strict: if set to True, throws error on semantic mismatch, otherwise log warning

    logger: destination of semantic mismatch warnings
    """

    align: int = 2
    skip_junk: bool = False
    strict: bool = False
    logger: logging.Logger = logging.root
