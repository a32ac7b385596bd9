# backend/mathnotes/main.py
import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import collections, documents, pages, persistence
from .config import settings
from .services.notebook import NotebookService
from .services.persistence import AsyncioScheduler
from .services.recognition import RecognitionService
from .storage.backends import BackendFactory
from .utils.logging import api_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One notebook per process, owned here and reached through app.state
    backend = BackendFactory.create(settings)
    scheduler = AsyncioScheduler(asyncio.get_running_loop())
    app.state.notebook = NotebookService.open(backend, scheduler)
    app.state.recognition = RecognitionService()
    api_logger.info("MathNotes API started", extra={"storage_backend": settings.STORAGE_BACKEND})

    yield

    report = app.state.notebook.close()
    api_logger.info("MathNotes API stopped", extra={"final_flush_ok": report.ok if report else None})


app = FastAPI(title="MathNotes API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify your actual frontend URL
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(collections.router)
app.include_router(documents.router)
app.include_router(pages.router)
app.include_router(persistence.router)

@app.get("/")
async def root():
    return {"message": "MathNotes API is running"}
