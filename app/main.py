import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from app.api.routes import router as api_router
from app.clients.lexicon_client import build_loader
from app.core.config import settings
from app.core.lexicon import LexiconStore
from app.core.logging import configure_logging
from app.middleware.request_id import RequestIDMiddleware
from app.services.transliteration import TransliterationService


def build_service() -> TransliterationService:
    loader = build_loader(
        url=settings.LEXICON_URL,
        path=settings.LEXICON_PATH,
        timeout_seconds=settings.LEXICON_TIMEOUT_SECONDS,
    )
    return TransliterationService(LexiconStore(loader))


@asynccontextmanager
async def lifespan(app: FastAPI):
    service = app.state.service
    # A failed load leaves the service on rules only
    await service.ensure_loaded()
    logging.info(
        "service_ready lexicon_loaded=%s entries=%d",
        service.lexicon.is_loaded,
        len(service.lexicon),
    )
    yield


def create_app(service: Optional[TransliterationService] = None) -> FastAPI:
    configure_logging()
    app = FastAPI(title="Urdu Roman Transliterator", version="1.0.0", lifespan=lifespan)

    app.add_middleware(RequestIDMiddleware)

    app.state.service = service or build_service()
    app.state.max_file_size = settings.MAX_FILE_SIZE

    logging.info(
        "lexicon_source remote=%s path=%s",
        settings.LEXICON_REMOTE,
        "" if settings.LEXICON_REMOTE else settings.LEXICON_PATH,
    )

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
