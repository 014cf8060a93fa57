from live_notifier.config.settings import Settings


def test_defaults(monkeypatch):
    for key in ("TRACKED_CATEGORY", "POLL_INTERVAL_SEC", "PORT", "TWITCH_CLIENT_ID", "TWITCH_CLIENT_SECRET"):
        monkeypatch.delenv(key, raising=False)
    s = Settings(_env_file=None)
    assert s.tracked_category == "Beat Saber"
    assert s.poll_interval_sec == 60
    assert s.api_port == 3000
    assert s.twitch_configured is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TWITCH_CLIENT_ID", "cid")
    monkeypatch.setenv("TWITCH_CLIENT_SECRET", "secret")
    monkeypatch.setenv("DISCORD_CHANNEL_ID", "1234")
    monkeypatch.setenv("POLL_INTERVAL_SEC", "30")
    s = Settings(_env_file=None)
    assert s.twitch_configured is True
    assert s.discord_channel_id == 1234
    assert s.poll_interval_sec == 30
