"""Persistence of the level to resume from.

``ProgressStore`` keeps a small JSON document mapping a session key to the
level a player should start at next time. The game writes ``level_index + 1``
whenever a level is completed and reads it once at startup.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Union

logger = logging.getLogger(__name__)

DEFAULT_LEVEL = 1


class ProgressStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _read_all(self) -> Dict[str, int]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable progress file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed progress file %s", self.path)
            return {}
        return {
            str(k): v for k, v in data.items() if isinstance(v, int) and v > 0
        }

    def read(self, session: str) -> int:
        """Return the stored level for ``session`` (1 if none)."""
        return self._read_all().get(session, DEFAULT_LEVEL)

    def write(self, session: str, level: int) -> None:
        data = self._read_all()
        data[session] = level
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        logger.debug("Saved progress %s -> %d", session, level)
