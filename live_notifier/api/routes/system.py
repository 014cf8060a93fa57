from fastapi import APIRouter
from pydantic import BaseModel
from live_notifier.config.settings import settings

router = APIRouter(prefix="/system", tags=["system"])

class Health(BaseModel):
    status: str

class Config(BaseModel):
    tracked_category: str
    poll_interval_sec: int

@router.get('/health', response_model=Health)
async def health():
    return Health(status='ok')

@router.get('/config', response_model=Config)
async def config():
    return Config(tracked_category=settings.tracked_category, poll_interval_sec=settings.poll_interval_sec)
