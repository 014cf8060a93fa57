from fastapi import FastAPI
from live_notifier.api.routes import status as status_routes
from live_notifier.api.routes import system as system_routes

app = FastAPI(title="Live Notifier API", version="0.1.0")

app.include_router(status_routes.router)
app.include_router(system_routes.router)

# Runtime component injection proxy

def set_components(tracker, store, twitch_client, discord_notifier):
    status_routes.set_components(tracker, store, twitch_client, discord_notifier)
