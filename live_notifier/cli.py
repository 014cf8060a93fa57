import asyncio
import argparse
import logging
from live_notifier.config.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

async def _check(login: str):
    from live_notifier.twitch.api_client import TwitchClient

    if not settings.twitch_configured:
        print("TWITCH_CLIENT_ID and TWITCH_CLIENT_SECRET are required")
        return
    client = TwitchClient(settings.twitch_client_id, settings.twitch_client_secret)
    try:
        snap = await client.get_stream(login)
    finally:
        await client.aclose()
    if snap is None:
        print(f"{login} is offline")
        return
    tracked = "tracked" if snap.category == settings.tracked_category else "not tracked"
    print(f"{login} is live: {snap.title!r} in {snap.category} ({tracked}), {snap.viewer_count} viewers")


async def _status():
    import httpx
    base = f"http://127.0.0.1:{settings.api_port}"
    async with httpx.AsyncClient(timeout=5) as client:
        status = (await client.get(f"{base}/status")).json()
        twitch = await client.get(f"{base}/twitch")
        discord = await client.get(f"{base}/discord")
    print(f"Twitch connected: {twitch.json().get('connected')}")
    print(f"Discord connected: {discord.json().get('connected')}")
    for name, live in sorted(status.get("isLive", {}).items()):
        print(f"{name}: {'live' if live else 'offline'}")


def _list():
    from live_notifier.storage.streamers import StreamerStore
    streamers = StreamerStore(settings.streamers_file).load()
    if not streamers:
        print("No streamers tracked")
    for s in streamers:
        print(s)


def main():
    parser = argparse.ArgumentParser(description="Twitch go-live notifier for Discord")
    parser.add_argument("command", nargs="?", default="run", choices=["run", "check", "status", "list"], help="run the service or a one-off command")
    parser.add_argument("arg", nargs="?", help="broadcaster login for check command")
    args = parser.parse_args()

    if args.command == "check":
        if not args.arg:
            print("Missing broadcaster login")
        else:
            asyncio.run(_check(args.arg))
    elif args.command == "status":
        asyncio.run(_status())
    elif args.command == "list":
        _list()
    else:
        from live_notifier.orchestration.service import main as service_main
        # poller, Discord bot and API server in one loop
        asyncio.run(service_main())
if __name__ == "__main__":
    main()
