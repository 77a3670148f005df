"""GeoJSON feature collections and their on-disk form.

Polygons are built with shapely and serialized with ``json``. One
collection maps to exactly one output file.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List

from nexrad_json.contracts import OutputWriteError

__all__ = ['FeatureCollection', 'write_collection']

logger = logging.getLogger(__name__)


class FeatureCollection:
    """Ordered container of GeoJSON Feature dicts for one elevation."""

    def __init__(self, features: Iterable[dict] = ()):
        self.features: List[dict] = list(features)

    def add_feature(self, feature: dict) -> None:
        self.features.append(feature)

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self):
        return iter(self.features)

    def to_dict(self) -> dict:
        return {"type": "FeatureCollection", "features": self.features}


def write_collection(collection: FeatureCollection, path: Path | str, indent=None) -> Path:
    """Serialize ``collection`` to ``path``.

    Parent directories are created. The file is owned by this call alone.

    Raises
    ------
    OutputWriteError
        If the file cannot be created or the collection cannot be serialized.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(collection.to_dict(), f, indent=indent)
    except (OSError, TypeError, ValueError) as e:
        raise OutputWriteError(f"Failed to write {path}: {e}") from e

    logger.info("Wrote %d feature(s) to %s", len(collection), path)
    return path
