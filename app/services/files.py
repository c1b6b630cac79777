"""
Batch transliteration of uploaded plain-text documents. Every document gets
its own outcome; a rejected or failing document never stops the others.
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple

from app.services.batching import ProgressCallback, run_in_batches

SUPPORTED_FILE_TYPES = (".txt", ".md", ".csv", ".text")
MAX_FILE_SIZE = 10 * 1024 * 1024


@dataclass(frozen=True)
class FileValidationResult:
    is_valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class FileOutcome:
    file: str
    success: bool
    result: Any = None
    error: Optional[str] = None


def file_extension(filename: str) -> str:
    return "." + filename.rsplit(".", 1)[-1].lower()


def validate_file(filename: str, size: int, max_size: int = MAX_FILE_SIZE) -> FileValidationResult:
    if size > max_size:
        return FileValidationResult(False, f"File size exceeds {max_size / (1024 * 1024):g}MB limit")
    if file_extension(filename) not in SUPPORTED_FILE_TYPES:
        return FileValidationResult(
            False, f"Unsupported file type. Supported types: {', '.join(SUPPORTED_FILE_TYPES)}"
        )
    return FileValidationResult(True)


def format_file_size(size: int) -> str:
    if size <= 0:
        return "0 Bytes"
    sizes = ["Bytes", "KB", "MB", "GB"]
    i = min(int(math.floor(math.log(size) / math.log(1024))), len(sizes) - 1)
    return f"{round(size / 1024 ** i, 2):g} {sizes[i]}"


async def process_files_batch(
    files: Sequence[Tuple[str, str]],
    processor: Callable[[str], Awaitable[Any]],
    batch_size: int = 10,
    on_progress: Optional[ProgressCallback] = None,
    max_size: int = MAX_FILE_SIZE,
) -> List[FileOutcome]:
    """Run ``processor`` over the content of each (filename, content) pair."""

    async def _one(item: Tuple[str, str]) -> FileOutcome:
        filename, content = item
        validation = validate_file(filename, len(content.encode("utf-8")), max_size)
        if not validation.is_valid:
            logging.warning("file_rejected file=%s reason=%s", filename, validation.error)
            return FileOutcome(file=filename, success=False, error=validation.error)
        try:
            result = await processor(content)
        except Exception as e:
            logging.exception("file_processing_failure file=%s", filename)
            return FileOutcome(file=filename, success=False, error=str(e) or "Unknown error")
        return FileOutcome(file=filename, success=True, result=result)

    return await run_in_batches(list(files), _one, batch_size, on_progress)
