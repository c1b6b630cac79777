from pydantic import BaseModel, Field
from typing import List, Optional

from app.core.config import settings
from app.core.models import Direction, Method, TransliterationResult
from app.services.files import FileOutcome
from app.services.options import TranslationOptions


class TransliterateRequest(BaseModel):
    text: str = Field(..., max_length=settings.MAX_TEXT_LEN)
    direction: Direction = Direction.SCRIPT_TO_ROMAN
    options: Optional[TranslationOptions] = None


class BatchTransliterateRequest(BaseModel):
    texts: List[str] = Field(..., max_length=settings.MAX_BATCH_ITEMS)
    direction: Direction = Direction.SCRIPT_TO_ROMAN
    options: Optional[TranslationOptions] = None


class FileItem(BaseModel):
    filename: str = Field(..., min_length=1)
    content: str


class FilesTransliterateRequest(BaseModel):
    files: List[FileItem] = Field(..., max_length=settings.MAX_BATCH_ITEMS)
    direction: Direction = Direction.SCRIPT_TO_ROMAN
    options: Optional[TranslationOptions] = None


class CompletenessOut(BaseModel):
    is_complete: bool
    untransliterated_parts: List[str]
    total_words: int
    untransliterated_count: int


class TransliterateResponse(BaseModel):
    success: bool = True
    original_text: str
    transliterated_text: str
    method: Method
    completeness: CompletenessOut
    completeness_percentage: int = Field(..., description="Share of words without residual source script")
    quality_level: str

    @classmethod
    def from_result(cls, result: TransliterationResult) -> "TransliterateResponse":
        c = result.completeness
        return cls(
            original_text=result.original_text,
            transliterated_text=result.transliterated_text,
            method=result.method,
            completeness=CompletenessOut(
                is_complete=c.is_complete,
                untransliterated_parts=list(c.untransliterated_parts),
                total_words=c.total_words,
                untransliterated_count=c.untransliterated_count,
            ),
            completeness_percentage=c.percentage,
            quality_level=c.quality_level,
        )


class BatchTransliterateResponse(BaseModel):
    success: bool = True
    results: List[TransliterateResponse]


class FileOutcomeOut(BaseModel):
    file: str
    success: bool
    result: Optional[TransliterateResponse] = None
    error: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: FileOutcome) -> "FileOutcomeOut":
        result = TransliterateResponse.from_result(outcome.result) if outcome.success else None
        return cls(file=outcome.file, success=outcome.success, result=result, error=outcome.error)


class FilesTransliterateResponse(BaseModel):
    success: bool = True
    processed: int
    failed: int
    results: List[FileOutcomeOut]
