import json
import logging
from pathlib import Path
from typing import List

log = logging.getLogger(__name__)


class StreamerStore:
    """Tracked broadcaster list, persisted as ``{"streamers": [...]}``."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._streamers: List[str] = []

    def load(self) -> List[str]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            self._streamers = [str(s) for s in data.get("streamers", [])]
        except FileNotFoundError:
            self._streamers = []
        except (OSError, ValueError, AttributeError) as e:
            log.error("Error reading streamers file %s: %s", self.path, e)
            self._streamers = []
        return self.list()

    def list(self) -> List[str]:
        return list(self._streamers)

    def add(self, name: str) -> bool:
        if name in self._streamers:
            return False
        self._streamers.append(name)
        self._flush()
        log.info("Added streamer %s", name)
        return True

    def remove(self, name: str) -> bool:
        if name not in self._streamers:
            return False
        self._streamers.remove(name)
        self._flush()
        log.info("Removed streamer %s", name)
        return True

    def _flush(self):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(".tmp")
            with tmp.open("w", encoding="utf-8") as f:
                json.dump({"streamers": self._streamers}, f, ensure_ascii=False, indent=2)
            tmp.replace(self.path)
        except OSError as e:
            log.error("Error writing streamers file %s: %s", self.path, e)
