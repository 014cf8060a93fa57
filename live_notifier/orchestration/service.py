import logging
import asyncio
import json
import sys
from prometheus_client import start_http_server
from live_notifier.twitch.api_client import TwitchClient
from live_notifier.twitch.poller import Poller
from live_notifier.twitch.live_tracker import LiveTracker
from live_notifier.notify.discord_bot import DiscordNotifier
from live_notifier.storage.streamers import StreamerStore
from live_notifier.config.settings import settings
from live_notifier.api.server import app, set_components
import uvicorn

log = logging.getLogger(__name__)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


class JsonFormatter(logging.Formatter):
    def format(self, record):
        base = {
            'time': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'msg': record.getMessage(),
        }
        if record.exc_info:
            base['exc'] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(log_format: str):
    if log_format != 'json':
        return
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    root.setLevel(logging.INFO)


async def main():
    configure_logging(settings.log_format)
    if settings.metrics_port:
        start_http_server(settings.metrics_port)

    store = StreamerStore(settings.streamers_file)
    log.info("Tracking %d streamer(s) for category %r", len(store.load()), settings.tracked_category)
    tracker = LiveTracker(settings.tracked_category)
    notifier = DiscordNotifier(store, settings.discord_channel_id, settings.discord_role_id)

    twitch = None
    if settings.twitch_configured:
        twitch = TwitchClient(settings.twitch_client_id, settings.twitch_client_secret)
        try:
            await twitch.authenticate()
        except Exception as e:
            # the poller re-authenticates on its first request
            log.warning("Initial Twitch authentication failed: %s", e)
    else:
        log.warning("TWITCH_CLIENT_ID/TWITCH_CLIENT_SECRET not set; polling disabled")

    set_components(tracker, store, twitch, notifier)

    async def run_api():
        config = uvicorn.Config(app, host="0.0.0.0", port=settings.api_port, log_level="info", lifespan="on")
        server = uvicorn.Server(config)
        log.info("Server is running on port %d", settings.api_port)
        await server.serve()

    tasks = [run_api()]
    if twitch is not None:
        tasks.append(Poller(twitch, store, tracker, notifier).run())
    if settings.discord_bot_token:
        tasks.append(notifier.start(settings.discord_bot_token))
    else:
        log.warning("DISCORD_BOT_TOKEN not set; notifications and commands disabled")
    try:
        await asyncio.gather(*tasks)
    finally:
        await notifier.close()
        if twitch is not None:
            await twitch.aclose()

if __name__ == "__main__":
    asyncio.run(main())
