import logging
from typing import Optional

import discord
from discord import Embed

from live_notifier.storage.streamers import StreamerStore
from live_notifier.twitch.live_tracker import Notify

log = logging.getLogger(__name__)

EMBED_COLOR = 0x8B00FF
ADD_COMMAND = "!addstreamer"
REMOVE_COMMAND = "!removestreamer"
ADMIN_ONLY_REPLY = "Only administrators can add or remove streamers."


def stream_url(broadcaster: str) -> str:
    return f"https://twitch.tv/{broadcaster}"


def build_embed(notify: Notify) -> Embed:
    embed = Embed(
        title=f"{notify.broadcaster} is now live on Twitch!",
        url=stream_url(notify.broadcaster),
        description=notify.title,
        color=EMBED_COLOR,
        timestamp=discord.utils.utcnow(),
    )
    embed.add_field(name="Game", value=notify.category, inline=True)
    embed.add_field(name="Viewers", value=str(notify.viewer_count), inline=True)
    embed.set_image(url=notify.thumbnail_url)
    return embed


def build_view(notify: Notify) -> discord.ui.View:
    view = discord.ui.View()
    view.add_item(discord.ui.Button(label="Watch Stream", url=stream_url(notify.broadcaster), style=discord.ButtonStyle.link))
    return view


class DiscordNotifier:
    """Discord side of the bot: live notifications plus the streamer list commands."""

    def __init__(self, store: StreamerStore, channel_id: Optional[int], role_id: Optional[int] = None,
                 client: Optional[discord.Client] = None):
        self.store = store
        self.channel_id = channel_id
        self.role_id = role_id
        if client is None:
            intents = discord.Intents.default()
            intents.message_content = True
            client = discord.Client(intents=intents)
        self.client = client
        self.client.event(self.on_ready)
        self.client.event(self.on_message)

    @property
    def connected(self) -> bool:
        return self.client.is_ready()

    async def on_ready(self):
        log.info("Logged in to Discord as %s", self.client.user)

    async def on_message(self, message: discord.Message):
        await self.handle_message(message)

    async def handle_message(self, message) -> Optional[str]:
        """Run a list command if ``message`` holds one; returns the reply sent."""
        if message.author == self.client.user or message.guild is None:
            return None
        parts = message.content.split()
        if not parts or parts[0] not in (ADD_COMMAND, REMOVE_COMMAND):
            return None
        command = parts[0]
        if not message.channel.permissions_for(message.author).administrator:
            reply = ADMIN_ONLY_REPLY
        elif len(parts) < 2:
            reply = f"Usage: {command} <streamer_name>"
        elif command == ADD_COMMAND:
            self.store.add(parts[1])
            reply = f"Streamer {parts[1]} added to the list."
        else:
            self.store.remove(parts[1])
            reply = f"Streamer {parts[1]} removed from the list."
        await message.channel.send(reply)
        return reply

    def _content(self, notify: Notify) -> str:
        if self.role_id:
            return f"<@&{self.role_id}> {notify.broadcaster} is live!"
        return f"{notify.broadcaster} is live!"

    async def _resolve_channel(self):
        channel = self.client.get_channel(self.channel_id)
        if channel is None:
            channel = await self.client.fetch_channel(self.channel_id)
        return channel

    async def send_live_notification(self, notify: Notify) -> bool:
        if not self.channel_id:
            log.error("Discord channel id not configured, dropping notification for %s", notify.broadcaster)
            return False
        try:
            channel = await self._resolve_channel()
            await channel.send(
                content=self._content(notify),
                embed=build_embed(notify),
                view=build_view(notify),
                allowed_mentions=discord.AllowedMentions(roles=True),
            )
            return True
        except discord.NotFound:
            log.error("Discord channel %s not found", self.channel_id)
        except discord.Forbidden:
            log.error("Missing permission to post in Discord channel %s", self.channel_id)
        except discord.HTTPException as e:
            log.error("Error sending Discord message: %s", e)
        return False

    async def start(self, token: str):
        await self.client.start(token)

    async def close(self):
        if not self.client.is_closed():
            await self.client.close()
