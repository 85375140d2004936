"""
Boston Crime Analytics - FastAPI app factory with startup data loading.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crime_analytics.data.store import DataStore
from crime_analytics.api.dependencies import set_store
from crime_analytics.api.router_meta import router as meta_router
from crime_analytics.api.router_summaries import router as summaries_router


def create_app(store: DataStore | None = None) -> FastAPI:
    """Build the app; a pre-built store skips loading from the inbox folder."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load all data at startup."""
        active = store
        if active is None:
            from crime_analytics.config import INBOX_FOLDER
            print(f"  INBOX_FOLDER = {INBOX_FOLDER}")
            active = DataStore().load(INBOX_FOLDER)
        set_store(active)

        print(f"\nBoston Crime Analytics ready - {active.row_count():,} rows, "
              f"{len(active.years())} years, {len(active.districts())} districts\n")
        yield
        set_store(None)

    app = FastAPI(
        title="Boston Crime Analytics API",
        description="Boston crime incident reports 2018-2022 - summaries, chart series, district queries",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(summaries_router)
    return app


app = create_app()
