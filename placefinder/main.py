# placefinder/main.py
from fastapi import FastAPI
from contextlib import asynccontextmanager
from beanie import init_beanie
from pymongo import AsyncMongoClient

import logging

from placefinder.configs import env, configs
from placefinder.models.hierarchy import PlaceUnit, PlaceNameTranslation
from placefinder.routes import locations
from fastapi.middleware.cors import CORSMiddleware


# Configure logging
logging.basicConfig(
    level=env.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app_settings = configs.get("app") or {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Connects to MongoDB and initializes Beanie on startup, closes the client
    on shutdown.
    """
    logger.info("Application startup initiated...")
    try:
        client = AsyncMongoClient(env.get("MONGO_URI"))
        await init_beanie(
            database=client[env.get("MONGO_DB")],
            document_models=[PlaceUnit, PlaceNameTranslation],
        )
        logger.info("MongoDB connection and Beanie initialization successful.")
    except Exception as e:
        logger.error(f"Failed to connect to MongoDB or initialize Beanie: {e}")
        raise

    yield

    logger.info("Application shutdown initiated...")
    await client.close()
    logger.info("MongoDB connection closed.")


app = FastAPI(
    title=env.get("APP_NAME") or app_settings.get("project_name", "PlaceFinder"),
    debug=bool(app_settings.get("debug_mode", False)),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.get("cors_origins", []),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(locations.router, prefix="/locations", tags=["Locations"])


@app.get("/health")
async def health():
    return {"status": "ok"}
