"""JSON Fixture Provider - canned demo payloads loaded from package data.

Invariants:
    - Each key maps to exactly one file: <key>.json
    - get() returns a deep copy; callers may mutate freely
    - Unknown keys raise FixtureNotFoundError, never return None
    - Files are read once per provider instance and cached

Design Decisions:
    - Packaged fixtures (marketplace/fixtures) by default; Settings.fixtures_dir overrides
      the whole directory for demos with different data
"""

import copy
import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from marketplace.core.errors import FixtureNotFoundError

logger = logging.getLogger(__name__)

PACKAGED_FIXTURES = "marketplace.fixtures"


class JsonFixtureProvider:
    """FixtureProvider backed by a directory of JSON files."""

    def __init__(self, directory: str | Path | None = None):
        self._directory = Path(directory) if directory else None
        self._cache: dict[str, Any] = {}

    def _path_for(self, key: str):
        name = f"{key}.json"
        if self._directory is not None:
            return self._directory / name
        return resources.files(PACKAGED_FIXTURES).joinpath(name)

    def has(self, key: str) -> bool:
        return key in self._cache or self._path_for(key).is_file()

    def get(self, key: str) -> Any:
        if key not in self._cache:
            path = self._path_for(key)
            if not path.is_file():
                logger.error("Missing fixture", extra={"fixture_key": key})
                raise FixtureNotFoundError(key)
            self._cache[key] = json.loads(path.read_text(encoding="utf-8"))
        return copy.deepcopy(self._cache[key])
