import logging
from typing import List, Optional, Sequence, Tuple, Union

from app.core.completeness import assess
from app.core.lexicon import LexiconStore
from app.core.models import Completeness, Direction, Method, TransliterationResult
from app.core.normalizer import normalize_urdu
from app.core.rules import (
    roman_word_to_urdu,
    split_urdu_punctuation,
    urdu_punctuation_to_roman,
    urdu_word_to_roman,
)
from app.services.batching import ProgressCallback, run_in_batches


class UrduToRoman:
    direction = Direction.SCRIPT_TO_ROMAN

    def __init__(self, lexicon: LexiconStore):
        self.lexicon = lexicon

    def prepare(self, text: str) -> str:
        return normalize_urdu(text).strip()

    def phrase_key(self, prepared: str) -> str:
        return prepared

    def resolve_word(self, word: str) -> Tuple[str, bool]:
        stem, punctuation = split_urdu_punctuation(word)
        tail = urdu_punctuation_to_roman(punctuation)
        found = self.lexicon.lookup_word(stem, self.direction)
        if found is not None:
            return found + tail, True
        return urdu_word_to_roman(stem) + tail, False


class RomanToUrdu:
    direction = Direction.ROMAN_TO_SCRIPT

    def __init__(self, lexicon: LexiconStore):
        self.lexicon = lexicon

    def prepare(self, text: str) -> str:
        return text.strip()

    def phrase_key(self, prepared: str) -> str:
        return prepared.lower()

    def resolve_word(self, word: str) -> Tuple[str, bool]:
        # punctuation is only handled on the rule-based path
        found = self.lexicon.lookup_word(word.lower(), self.direction)
        if found is not None:
            return found, True
        return roman_word_to_urdu(word), False


class TransliterationService:
    """
    Hybrid lexicon + rules transliteration between Urdu script and Roman Urdu.

    Create one instance per process and share it; the lexicon is the only
    shared state and is read-only once loaded.
    """

    def __init__(self, lexicon: Optional[LexiconStore] = None):
        self.lexicon = lexicon if lexicon is not None else LexiconStore()
        self._strategies = {
            Direction.SCRIPT_TO_ROMAN: UrduToRoman(self.lexicon),
            Direction.ROMAN_TO_SCRIPT: RomanToUrdu(self.lexicon),
        }

    async def ensure_loaded(self) -> None:
        await self.lexicon.ensure_loaded()

    async def transliterate(
        self, text: str, direction: Union[Direction, str], request_id: str = "n/a"
    ) -> TransliterationResult:
        direction = Direction(direction)
        await self.ensure_loaded()

        text = text or ""
        if not text.strip():
            return TransliterationResult(
                original_text=text,
                transliterated_text="",
                method=Method.RULE_BASED,
                completeness=Completeness(is_complete=True),
            )

        strategy = self._strategies[direction]
        prepared = strategy.prepare(text)

        phrase = self.lexicon.lookup_phrase(strategy.phrase_key(prepared), direction)
        if phrase is not None:
            return self._finish(text, phrase, Method.LEXICON, direction, request_id)

        resolved = [strategy.resolve_word(word) for word in prepared.split()]
        output = " ".join(word for word, _ in resolved)
        method = Method.from_usage([used for _, used in resolved])
        return self._finish(text, output, method, direction, request_id)

    def _finish(
        self, original: str, output: str, method: Method, direction: Direction, request_id: str
    ) -> TransliterationResult:
        completeness = assess(original, output, direction)
        logging.debug(
            "transliteration_done request_id=%s direction=%s method=%s words=%d untransliterated=%d",
            request_id,
            direction.value,
            method.value,
            completeness.total_words,
            completeness.untransliterated_count,
        )
        return TransliterationResult(
            original_text=original,
            transliterated_text=output,
            method=method,
            completeness=completeness,
        )

    async def transliterate_batch(
        self,
        texts: Sequence[str],
        direction: Union[Direction, str],
        batch_size: int = 10,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[TransliterationResult]:
        direction = Direction(direction)

        async def _one(text: str) -> TransliterationResult:
            return await self.transliterate(text, direction)

        return await run_in_batches(list(texts), _one, batch_size, on_progress)
