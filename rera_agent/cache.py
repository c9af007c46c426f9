"""Instruction cache: natural-language instruction -> resolved CachedAction.

Entries are keyed by the exact instruction text and never expire. After a
portal layout change, stale entries keep being replayed until the cache file
is deleted by hand.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .models import CachedAction

logger = logging.getLogger(__name__)


class InstructionCache:
    """File-backed JSON store shared by every session in the process.

    There is no locking. Each ``write`` re-reads the file and rewrites it
    without yielding to the event loop, so writers racing on different
    instructions keep each other's entries; racing on the same instruction
    just stores an equivalent action twice.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, dict]:
        if not self.path.exists():
            return {}
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"Instruction cache {self.path} is not a JSON object")
        return data

    async def read(self, instruction: str) -> Optional[CachedAction]:
        entry = self._load().get(instruction)
        if entry is None:
            return None
        return CachedAction.from_dict(entry)

    async def write(self, instruction: str, action: CachedAction) -> None:
        data = self._load()
        data[instruction] = action.to_dict()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.debug("Cached action for %r in %s", instruction, self.path)
