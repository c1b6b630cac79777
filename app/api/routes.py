import logging
from fastapi import APIRouter, Depends, Request, Response
from app.api.schemas import (
    BatchTransliterateRequest,
    BatchTransliterateResponse,
    FileOutcomeOut,
    FilesTransliterateRequest,
    FilesTransliterateResponse,
    TransliterateRequest,
    TransliterateResponse,
)
from app.services.files import process_files_batch
from app.services.options import (
    DEFAULT_OPTIONS,
    batch_transliterate_with_options,
    transliterate_with_options,
)
from app.services.transliteration import TransliterationService

router = APIRouter()


def get_service(request: Request) -> TransliterationService:
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise RuntimeError("TransliterationService is not attached to the application")
    return service


@router.get("/health")
async def health(service: TransliterationService = Depends(get_service)):
    return {
        "ok": True,
        "lexicon_loaded": service.lexicon.is_loaded,
        "lexicon_entries": len(service.lexicon),
    }


@router.post("/transliterate", response_model=TransliterateResponse)
async def transliterate(
    req: TransliterateRequest,
    request: Request,
    response: Response,
    service: TransliterationService = Depends(get_service),
):
    rid = getattr(request.state, "request_id", "n/a")
    result = await transliterate_with_options(service, req.text, req.direction, req.options, rid)
    logging.info(
        "transliteration_done request_id=%s direction=%s method=%s completeness=%d",
        rid,
        req.direction.value,
        result.method.value,
        result.completeness.percentage,
    )
    response.headers["X-Transliteration-Method"] = result.method.value
    return TransliterateResponse.from_result(result)


@router.post("/transliterate/batch", response_model=BatchTransliterateResponse)
async def transliterate_batch(
    req: BatchTransliterateRequest,
    request: Request,
    service: TransliterationService = Depends(get_service),
):
    rid = getattr(request.state, "request_id", "n/a")

    def on_progress(pct: float) -> None:
        logging.info("batch_progress request_id=%s progress=%.0f", rid, pct)

    results = await batch_transliterate_with_options(
        service, req.texts, req.direction, req.options, on_progress
    )
    return BatchTransliterateResponse(results=[TransliterateResponse.from_result(r) for r in results])


@router.post("/transliterate/files", response_model=FilesTransliterateResponse)
async def transliterate_files(
    req: FilesTransliterateRequest,
    request: Request,
    service: TransliterationService = Depends(get_service),
):
    rid = getattr(request.state, "request_id", "n/a")
    options = req.options or DEFAULT_OPTIONS

    async def processor(content: str):
        return await transliterate_with_options(service, content, req.direction, options, rid)

    def on_progress(pct: float) -> None:
        logging.info("file_batch_progress request_id=%s progress=%.0f", rid, pct)

    outcomes = await process_files_batch(
        [(f.filename, f.content) for f in req.files],
        processor,
        batch_size=options.batch_size,
        on_progress=on_progress if options.progress_updates else None,
        max_size=request.app.state.max_file_size,
    )
    failed = sum(1 for o in outcomes if not o.success)
    return FilesTransliterateResponse(
        processed=len(outcomes) - failed,
        failed=failed,
        results=[FileOutcomeOut.from_outcome(o) for o in outcomes],
    )
