"""
Tests for the command line entry point.
"""

import json
import sys

import httpx
import pytest

from live_notifier import cli
from live_notifier.config.settings import settings
from live_notifier.twitch import api_client

STREAM = {
    "user_id": "123",
    "user_login": "alice",
    "game_name": "Beat Saber",
    "title": "T1",
    "viewer_count": 10,
    "thumbnail_url": "https://x/{width}x{height}.jpg",
}


@pytest.fixture
def twitch_credentials(monkeypatch):
    monkeypatch.setattr(settings, "twitch_client_id", "cid")
    monkeypatch.setattr(settings, "twitch_client_secret", "secret")
    monkeypatch.setattr(settings, "tracked_category", "Beat Saber")


def mock_twitch(monkeypatch, streams):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "id.twitch.tv":
            return httpx.Response(200, json={"access_token": "tok"})
        return httpx.Response(200, json={"data": streams})

    real_client = api_client.TwitchClient

    def factory(client_id, client_secret):
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return real_client(client_id, client_secret, http=http)

    monkeypatch.setattr(api_client, "TwitchClient", factory)


def test_list_prints_tracked_streamers(monkeypatch, tmp_path, capsys):
    path = tmp_path / "streamers.json"
    path.write_text(json.dumps({"streamers": ["alice", "bob"]}), encoding="utf-8")
    monkeypatch.setattr(settings, "streamers_file", str(path))
    cli._list()
    assert capsys.readouterr().out.splitlines() == ["alice", "bob"]


def test_list_empty(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(settings, "streamers_file", str(tmp_path / "missing.json"))
    cli._list()
    assert "No streamers tracked" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_check_offline(monkeypatch, capsys, twitch_credentials):
    mock_twitch(monkeypatch, [])
    await cli._check("alice")
    assert capsys.readouterr().out.strip() == "alice is offline"


@pytest.mark.asyncio
async def test_check_live(monkeypatch, capsys, twitch_credentials):
    mock_twitch(monkeypatch, [STREAM])
    await cli._check("alice")
    out = capsys.readouterr().out.strip()
    assert out == "alice is live: 'T1' in Beat Saber (tracked), 10 viewers"


@pytest.mark.asyncio
async def test_check_without_credentials(monkeypatch, capsys):
    monkeypatch.setattr(settings, "twitch_client_id", None)
    await cli._check("alice")
    assert "TWITCH_CLIENT_ID" in capsys.readouterr().out


def test_main_check_requires_login(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["live-notifier", "check"])
    cli.main()
    assert "Missing broadcaster login" in capsys.readouterr().out
