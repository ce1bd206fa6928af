import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cyclesim.config import settings
from cyclesim.services.catalog_service import initialize_catalog
from cyclesim.api.routes import health, catalog, life_stages, expenses, cycles, projections

logging.basicConfig(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: load reference catalogs
    initialize_catalog()
    yield


app = FastAPI(title="Household Cycle Simulator", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(catalog.router, prefix="/api")
app.include_router(life_stages.router, prefix="/api")
app.include_router(expenses.router, prefix="/api")
app.include_router(cycles.router, prefix="/api")
app.include_router(projections.router, prefix="/api")
