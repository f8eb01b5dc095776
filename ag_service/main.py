# ag_service/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from ag_service.api.v1.api import api_router
from ag_service.core.config import settings
from ag_service.core.exceptions import AppError, app_error_handler, database_error_handler

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema is managed by Alembic (`alembic upgrade head`)
    logger.info(f"AG service starting up (env={settings.ENV})")
    yield
    logger.info("AG service shutting down")


app = FastAPI(
    title="IFMSA Brazil AG Service",
    version="1.0.0",
    description="""
        General Assembly (AG) registration, attendance and report service.

        ## Features

        * **Assemblies**: AG / AGE lifecycle, roster import, archive and deletion
        * **Modalities**: pricing tiers with optional capacity
        * **Registrations**: participant sign-up, payment receipts, admin review
        * **Sessions**: plenárias, sessões and standalone roll calls with four-state attendance
        * **Reports**: attendance spreadsheets and full assembly exports

        ## Authentication

        Endpoints require a JWT in the `Authorization: Bearer <token>` header.
        """,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(SQLAlchemyError, database_error_handler)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"status": "AG Service is running"}
