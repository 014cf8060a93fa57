from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

from live_notifier.storage.streamers import StreamerStore
from live_notifier.twitch.live_tracker import LiveTracker

router = APIRouter(tags=["status"])

_tracker: Optional[LiveTracker] = None
_store: Optional[StreamerStore] = None
_twitch = None
_discord = None

class Connection(BaseModel):
    connected: bool

class LiveStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_live: Dict[str, bool] = Field(alias="isLive")

class StreamerList(BaseModel):
    streamers: List[str]

def _connection(component) -> JSONResponse:
    ok = bool(component is not None and component.connected)
    return JSONResponse(Connection(connected=ok).model_dump(), status_code=200 if ok else 500)

@router.get('/twitch', response_model=Connection)
async def twitch():
    return _connection(_twitch)

@router.get('/discord', response_model=Connection)
async def discord():
    return _connection(_discord)

@router.get('/status', response_model=LiveStatus, response_model_by_alias=True)
async def status():
    return LiveStatus(is_live=_tracker.live_map() if _tracker else {})

@router.get('/streamers', response_model=StreamerList)
async def streamers():
    return StreamerList(streamers=_store.list() if _store else [])

def set_components(tracker=None, store=None, twitch_client=None, discord_notifier=None):
    global _tracker, _store, _twitch, _discord
    _tracker = tracker
    _store = store
    _twitch = twitch_client
    _discord = discord_notifier
