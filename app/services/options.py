"""
Caller-configurable formatting applied around the transliteration service.

Options only shape the text going in and the text coming out; they never
change how words are resolved. ``preferred_method`` is accepted for
compatibility with saved settings and is advisory: resolution is always
lexicon first, then rules.
"""
import dataclasses
import logging
import re
import unicodedata
from typing import List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field

from app.core.models import Direction, TransliterationResult
from app.services.batching import ProgressCallback, run_in_batches
from app.services.transliteration import TransliterationService

REMOVABLE_PUNCT = re.compile(r"[۔؟،؍٪.,!?;:]")
_WHITESPACE = re.compile(r"\s+")
_TITLE_WORD = re.compile(r"\w\S*", re.ASCII)


class TranslationOptions(BaseModel):
    preferred_method: Literal[
        "auto", "lexicon-first", "rule-based-first", "lexicon-only", "rule-based-only"
    ] = "auto"
    quality_threshold: int = Field(80, ge=0, le=100)
    show_incomplete_warnings: bool = True
    preserve_formatting: bool = True
    normalize_text: bool = True
    output_case: Literal["preserve", "lowercase", "uppercase", "title"] = "preserve"
    punctuation_handling: Literal["convert", "preserve", "remove"] = "convert"
    batch_size: int = Field(10, ge=1)
    progress_updates: bool = True
    debug_mode: bool = False


DEFAULT_OPTIONS = TranslationOptions()


def preprocess_text(text: str, options: TranslationOptions) -> str:
    if not options.preserve_formatting:
        text = _WHITESPACE.sub(" ", text).strip()
    if options.normalize_text:
        text = unicodedata.normalize("NFC", text)
    return text


def format_output(text: str, options: TranslationOptions) -> str:
    if options.output_case == "lowercase":
        text = text.lower()
    elif options.output_case == "uppercase":
        text = text.upper()
    elif options.output_case == "title":
        text = _TITLE_WORD.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), text)

    if options.punctuation_handling == "remove":
        text = REMOVABLE_PUNCT.sub("", text)
    return text


def check_quality(result: TransliterationResult, options: TranslationOptions) -> bool:
    """Log a warning when completeness is under the threshold. Returns True if it passes."""
    percentage = result.completeness.percentage
    if percentage >= options.quality_threshold:
        return True
    if options.show_incomplete_warnings:
        logging.warning(
            "transliteration_quality_below_threshold completeness=%d threshold=%d untransliterated=%s",
            percentage,
            options.quality_threshold,
            result.completeness.untransliterated_parts[:5],
        )
    return False


async def transliterate_with_options(
    service: TransliterationService,
    text: str,
    direction: Union[Direction, str],
    options: Optional[TranslationOptions] = None,
    request_id: str = "n/a",
) -> TransliterationResult:
    options = options or DEFAULT_OPTIONS
    processed = preprocess_text(text or "", options)

    if options.debug_mode:
        logging.info("[DEBUG] request_id=%s original=%r processed=%r", request_id, text, processed)
        logging.info("[DEBUG] request_id=%s options=%s", request_id, options.model_dump())

    result = await service.transliterate(processed, direction, request_id)
    result = dataclasses.replace(
        result, transliterated_text=format_output(result.transliterated_text, options)
    )
    check_quality(result, options)

    if options.debug_mode:
        logging.info(
            "[DEBUG] request_id=%s result=%r method=%s completeness=%s",
            request_id,
            result.transliterated_text,
            result.method.value,
            result.completeness,
        )
    return result


async def batch_transliterate_with_options(
    service: TransliterationService,
    texts: Sequence[str],
    direction: Union[Direction, str],
    options: Optional[TranslationOptions] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> List[TransliterationResult]:
    options = options or DEFAULT_OPTIONS

    async def _one(text: str) -> TransliterationResult:
        return await transliterate_with_options(service, text, direction, options)

    progress = on_progress if options.progress_updates else None
    return await run_in_batches(list(texts), _one, options.batch_size, progress)
