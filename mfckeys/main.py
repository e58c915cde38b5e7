"""
mfckeys: MIFARE Classic dump key extraction.

FastAPI backend providing APIs for:
- Decoding raw 1K/4K dumps into their UID and per-sector Key A / Key B
- Exporting the keys as mfocGUI (a/b .dump) or Proxmark (.bin) key files

Run with: uvicorn mfckeys.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from mfckeys import config
from mfckeys.api import keys

logging.basicConfig(
    level=config.API_LOG_LEVEL,
    format=config.LOG_FORMAT,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting mfckeys %s", config.VERSION)
    yield
    logger.info("Shutting down mfckeys")


app = FastAPI(
    title="mfckeys",
    description="MIFARE Classic dump key extraction",
    version=config.VERSION,
    lifespan=lifespan,
)

app.include_router(keys.router)


@app.get("/api/health")
async def health():
    """Liveness check."""
    return {"status": "ok"}
