import asyncio
import logging
from typing import Awaitable, Optional, Protocol

from .api_client import TwitchClient
from .live_tracker import LiveTracker, Notify
from live_notifier.storage.streamers import StreamerStore
from live_notifier.config.settings import settings
from live_notifier.metrics.registry import (
    poll_duration_seconds, poll_errors_total, last_poll_timestamp, broadcaster_live, streamers_total,
    notifications_sent_total, notification_failures_total,
)

log = logging.getLogger(__name__)


class NotificationSink(Protocol):
    def send_live_notification(self, notify: Notify) -> Awaitable[bool]: ...


class Poller:
    def __init__(self, client: TwitchClient, store: StreamerStore, tracker: LiveTracker,
                 sink: NotificationSink, interval: Optional[int] = None):
        self.client = client
        self.store = store
        self.tracker = tracker
        self.sink = sink
        self.interval = interval if interval is not None else settings.poll_interval_sec

    async def _check_broadcaster(self, login: str) -> Optional[Notify]:
        try:
            snapshot = await self.client.get_stream(login)
        except Exception as e:
            poll_errors_total.inc()
            log.warning("Error fetching stream data for %s: %s", login, e)
            return None
        prior = self.tracker.state(login)
        notify = self.tracker.evaluate(login, snapshot)
        current = self.tracker.state(login)
        broadcaster_live.labels(broadcaster=login).set(1 if current.is_live else 0)
        if current != prior:
            log.info("%s is now %s", login,
                     f"live in {current.current_category!r}" if current.is_live else "offline")
        if notify is not None:
            await self._deliver(notify)
        return notify

    async def _deliver(self, notify: Notify):
        try:
            ok = await self.sink.send_live_notification(notify)
        except Exception:
            log.exception("Notification for %s raised", notify.broadcaster)
            ok = False
        if ok:
            notifications_sent_total.inc()
            log.info("Sent live notification for %s (%s)", notify.broadcaster, notify.category)
        else:
            notification_failures_total.inc()

    async def poll_once(self):
        streamers = self.store.list()
        streamers_total.set(len(streamers))
        with poll_duration_seconds.time():
            results = await asyncio.gather(*(self._check_broadcaster(s) for s in streamers))
        last_poll_timestamp.set_to_current_time()
        return [n for n in results if n is not None]

    async def run(self):
        # a tick completes before the next sleep, so the same broadcaster is never evaluated twice at once
        while True:
            await self.poll_once()
            await asyncio.sleep(self.interval)

