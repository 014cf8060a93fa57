import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from .live_tracker import StreamSnapshot

log = logging.getLogger(__name__)

TOKEN_URL = "https://id.twitch.tv/oauth2/token"
BASE_URL = "https://api.twitch.tv/helix"


class TwitchAPIError(RuntimeError):
    pass


def snapshot_from_stream(login: str, item: Dict[str, Any]) -> StreamSnapshot:
    missing = [k for k in ("title", "game_name") if item.get(k) is None]
    if missing:
        raise TwitchAPIError(f"stream payload for {login} is missing {', '.join(missing)}")
    return StreamSnapshot(
        broadcaster=login,
        title=item["title"],
        category=item["game_name"],
        viewer_count=int(item.get("viewer_count") or 0),
        thumbnail_url_template=item.get("thumbnail_url") or "",
        broadcaster_id=item.get("user_id"),
    )


class TwitchClient:
    def __init__(self, client_id: str, client_secret: str, http: Optional[httpx.AsyncClient] = None):
        self._client_id = client_id
        self._secret = client_secret
        self._http = http or httpx.AsyncClient(timeout=10)
        self._token: Optional[str] = None
        self._auth_lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self._token is not None

    async def authenticate(self) -> str:
        params = {
            "client_id": self._client_id,
            "client_secret": self._secret,
            "grant_type": "client_credentials",
        }
        r = await self._http.post(TOKEN_URL, params=params)
        if r.status_code == 400:
            raise TwitchAPIError("Twitch rejected client id/secret")
        r.raise_for_status()
        token = r.json().get("access_token")
        if not token:
            raise TwitchAPIError("No access token in Twitch response")
        self._token = token
        log.info("Obtained Twitch app access token")
        return token

    def _headers(self, token: str) -> Dict[str, str]:
        return {"Client-ID": self._client_id, "Authorization": f"Bearer {token}"}

    async def _ensure_token(self, rejected: Optional[str] = None) -> str:
        async with self._auth_lock:
            # another request may have refreshed while we waited
            if self._token is None or self._token == rejected:
                self._token = None
                await self.authenticate()
            return self._token

    async def _get(self, path: str, params: Dict[str, str]) -> httpx.Response:
        token = self._token or await self._ensure_token()
        r = await self._http.get(f"{BASE_URL}{path}", params=params, headers=self._headers(token))
        if r.status_code == 401:
            log.warning("Twitch token rejected, refreshing")
            token = await self._ensure_token(rejected=token)
            r = await self._http.get(f"{BASE_URL}{path}", params=params, headers=self._headers(token))
        if r.is_error:
            raise TwitchAPIError(f"GET {path} failed with HTTP {r.status_code}")
        return r

    async def get_stream(self, login: str) -> Optional[StreamSnapshot]:
        """Current stream for ``login``, or None when the broadcaster is offline."""
        r = await self._get("/streams", {"user_login": login})
        items = r.json().get("data", [])
        if not items:
            return None
        return snapshot_from_stream(login, items[0])

    async def aclose(self):
        await self._http.aclose()
