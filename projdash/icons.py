"""Short file-type tags shown in front of file rows.

Tags come from pygments' lexer registry, matched by file name only, so no
file content is read.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

TAG_WIDTH = 4


@lru_cache(maxsize=512)
def _tag_for_name(name: str) -> str:
    try:
        lexer = get_lexer_for_filename(name)
    except ClassNotFound:
        return ""
    except Exception as exc:
        logger.debug("file-type lookup failed for %s: %s", name, exc)
        return ""
    label = lexer.aliases[0] if lexer.aliases else lexer.name.lower()
    return label[:TAG_WIDTH]


def file_type_tag(path: Path | str) -> str:
    """Return a tag such as ``py`` or ``md`` for ``path``, or ``""``."""
    return _tag_for_name(Path(path).name)
