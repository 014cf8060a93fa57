from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    twitch_client_id: Optional[str] = Field(default=None, alias="TWITCH_CLIENT_ID")
    twitch_client_secret: Optional[str] = Field(default=None, alias="TWITCH_CLIENT_SECRET")
    discord_bot_token: Optional[str] = Field(default=None, alias="DISCORD_BOT_TOKEN")
    discord_channel_id: Optional[int] = Field(default=None, alias="DISCORD_CHANNEL_ID")
    discord_role_id: Optional[int] = Field(default=None, alias="DISCORD_ROLE_ID")
    tracked_category: str = Field(default="Beat Saber", alias="TRACKED_CATEGORY")
    poll_interval_sec: int = Field(default=60, alias="POLL_INTERVAL_SEC")
    streamers_file: str = Field(default="streamers.json", alias="STREAMERS_FILE")
    api_port: int = Field(default=3000, alias="PORT")
    metrics_port: int = Field(default=9100, alias="METRICS_PORT")
    log_format: str = Field(default="plain", alias="LOG_FORMAT")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def twitch_configured(self) -> bool:
        return bool(self.twitch_client_id and self.twitch_client_secret)

settings = Settings()
