"""Optional per-project metadata from ``.project.toml``.

The file is decoded as data only; it is never executed. Anything that does
not decode to a table with a string ``name`` or ``description`` is treated as
if the file were absent, so bad metadata never blocks the dashboard.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

METADATA_FILENAME = ".project.toml"


@dataclass(frozen=True)
class ProjectMetadata:
    name: str | None = None
    description: str | None = None


def _string_value(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def read_metadata(directory: Path) -> ProjectMetadata | None:
    """Return metadata for ``directory``, or ``None`` when there is none usable."""
    metadata_path = Path(directory).resolve() / METADATA_FILENAME
    try:
        with metadata_path.open("rb") as handle:
            data = tomllib.load(handle)
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable metadata %s: %s", metadata_path, exc)
        return None

    name = _string_value(data, "name")
    description = _string_value(data, "description")
    if name is None and description is None:
        logger.debug("ignoring metadata without name/description: %s", metadata_path)
        return None
    return ProjectMetadata(name=name, description=description)
