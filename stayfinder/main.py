import logging

from fastapi import FastAPI

from . import models
from .config import settings
from .database import engine
from .routers import listing_router, reservation_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("stayfinder")

# Creates missing tables. Schema changes go through Alembic.
models.Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Stayfinder API",
    description="Property listings, search and reservations.",
    version="1.0.0",
)

app.include_router(listing_router.router)
app.include_router(reservation_router.router)

logger.info("Stayfinder API ready.")


@app.get("/")
def read_root():
    return {"message": "Welcome to Stayfinder"}
