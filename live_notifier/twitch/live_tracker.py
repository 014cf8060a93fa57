import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

THUMBNAIL_WIDTH = 400
THUMBNAIL_HEIGHT = 225


@dataclass(frozen=True)
class BroadcasterState:
    is_live: bool = False
    current_category: Optional[str] = None


OFFLINE = BroadcasterState()


@dataclass(frozen=True)
class StreamSnapshot:
    broadcaster: str
    title: str
    category: str
    viewer_count: int
    thumbnail_url_template: str
    broadcaster_id: Optional[str] = None


@dataclass(frozen=True)
class Notify:
    broadcaster: str
    title: str
    category: str
    viewer_count: int
    thumbnail_url: str


def _millis() -> int:
    return int(time.time() * 1000)


def build_thumbnail_url(template: str, timestamp_ms: int) -> str:
    url = template.replace("{width}", str(THUMBNAIL_WIDTH)).replace("{height}", str(THUMBNAIL_HEIGHT))
    return f"{url}?t={timestamp_ms}"


class LiveTracker:
    """Per-broadcaster liveness and category, deciding when a go-live notification fires.

    Notifies on the edge into the tracked category: either going live in it, or
    switching to it while already live. Going offline re-arms the broadcaster.
    """

    def __init__(self, tracked_category: str, clock: Callable[[], int] = _millis):
        self.tracked_category = tracked_category
        self._clock = clock
        self._state: Dict[str, BroadcasterState] = {}

    def state(self, broadcaster: str) -> BroadcasterState:
        return self._state.get(broadcaster, OFFLINE)

    def live_map(self) -> Dict[str, bool]:
        return {name: st.is_live for name, st in self._state.items()}

    def evaluate(self, broadcaster: str, snapshot: Optional[StreamSnapshot],
                 tracked_category: Optional[str] = None) -> Optional[Notify]:
        """Fold one observation into the state; ``snapshot`` is None when offline."""
        tracked = tracked_category if tracked_category is not None else self.tracked_category
        if snapshot is None:
            self._state[broadcaster] = OFFLINE
            return None

        prior = self.state(broadcaster)
        if prior.is_live and prior.current_category == snapshot.category:
            return None

        self._state[broadcaster] = BroadcasterState(is_live=True, current_category=snapshot.category)
        if snapshot.category != tracked:
            return None
        return Notify(
            broadcaster=broadcaster,
            title=snapshot.title,
            category=snapshot.category,
            viewer_count=snapshot.viewer_count,
            thumbnail_url=build_thumbnail_url(snapshot.thumbnail_url_template, self._clock()),
        )
