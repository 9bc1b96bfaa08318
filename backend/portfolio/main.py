# portfolio/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
import logging

from portfolio.core.settings import settings, delivery_config
from portfolio.routers.contact import router as contact_router
from portfolio.routers.health import router as health_router

app = FastAPI(title=settings.api_title)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logging.getLogger("uvicorn.error").info(
    f"[main] delivery configured = {delivery_config.is_complete}, region = {delivery_config.region}"
)

# Routers
app.include_router(contact_router)
app.include_router(health_router)

def _api_routes(routes):
    """Yield APIRoutes, descending into included/mounted routers."""
    for r in routes:
        if isinstance(r, APIRoute):
            yield r
            continue
        nested = getattr(r, "routes", None)
        if nested is None:
            nested = getattr(getattr(r, "router", None), "routes", None)
        if nested:
            yield from _api_routes(nested)

@app.get("/__routes")
async def __routes():
    seen = set()
    out = []
    for r in _api_routes(app.routes):
        key = (r.path, tuple(sorted(r.methods)))
        if key in seen:
            continue
        seen.add(key)
        out.append({"methods": sorted(list(r.methods)), "path": r.path})
    return out
