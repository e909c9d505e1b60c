"""
Crash Explorer — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crashviz.config import DATA_DIR
from crashviz.data.store import CrashStore
from crashviz.api.router_meta import router as meta_router
from crashviz.api.router_charts import router as charts_router
from crashviz.api.router_export import router as export_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the merged table once at startup. Load errors are fatal."""
    if getattr(app.state, "store", None) is None:
        # CRASH_DATA_DIR is read per startup; `cli serve --data-dir` sets it
        data_dir = Path(os.environ.get("CRASH_DATA_DIR", str(DATA_DIR)))
        app.state.store = CrashStore.from_files(data_dir)
    store = app.state.store
    print(f"\nCrash Explorer ready — {store.row_count():,} merged rows, "
          f"{store.case_count():,} cases\n")
    yield


def create_app(store: CrashStore | None = None) -> FastAPI:
    """Build the API. Pass a store to skip loading from DATA_DIR (tests)."""
    app = FastAPI(
        title="Crash Explorer API",
        description="Traffic-accident explorer — distributions, bubble cross-tabs, summary tables",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(charts_router)
    app.include_router(export_router)
    return app


app = create_app()
