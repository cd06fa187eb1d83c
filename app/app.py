import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import app.api.routes_auth as routes_auth
import app.api.routes_candidate as routes_candidate
import app.api.routes_health as routes_health
import app.api.routes_nomination as routes_nomination
import app.api.routes_user as routes_user
import app.api.routes_vote as routes_vote
from app.core.config import Settings, get_settings
from app.core.exceptions import VotingError
from app.db.core import Database
from app.scripts import seed_data
from app.services.catalog import CatalogStore
from app.services.identity import IdentityProvider
from app.services.reveal_clock import RevealClock
from app.services.vote_ledger import VoteLedger


def attach_services(app: FastAPI, database: Database, settings: Settings) -> None:
    """Wire the store handle and the services built on it onto app.state."""
    catalog = CatalogStore(database.session_factory)
    app.state.database = database
    app.state.catalog = catalog
    app.state.vote_ledger = VoteLedger(database.session_factory, catalog)
    app.state.identity = IdentityProvider(database.session_factory, settings)
    app.state.reveal_clock = RevealClock(
        settings.RESULTS_REVEAL_AT, settings.LOCK_VOTING_AFTER_REVEAL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logging.info("🚀 Starting up...")
    database = Database(settings.DATABASE_URL, echo=settings.DB_ECHO)
    attach_services(app, database, settings)
    if settings.ENV == "development":
        await database.init_db()
        await seed_data.seed_data(database.session_factory, settings)
    yield
    logging.info("🛑 Shutting down...")
    await database.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description=settings.PROJECT_DESCRIPTION,
        lifespan=lifespan
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in (routes_health.router, routes_auth.router, routes_nomination.router,
                   routes_candidate.router, routes_vote.router, routes_user.router):
        app.include_router(router, prefix=settings.API_V1_PREFIX)

    @app.exception_handler(VotingError)
    async def voting_error_handler(request, ex: VotingError):
        return JSONResponse(status_code=ex.status_code, content={"error": ex.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request, ex: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request",
                     "details": jsonable_encoder(ex.errors())}
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request, ex: Exception):
        logging.error(f"unhandled error on {request.method} {request.url.path}: {ex}", exc_info=ex)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/")
    async def root():
        return {"message": "Premia voting backend is running"}
    return app


app = create_app()
