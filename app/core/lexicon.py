"""
Bidirectional Urdu <-> Roman Urdu lexicon, loaded once from an external feed
and read by every transliteration call afterwards.
"""
import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, TypeAdapter

from app.core.models import Direction
from app.core.normalizer import normalize_urdu

LexiconLoader = Callable[[], Awaitable[Any]]
LexiconMaps = Dict[Direction, Dict[str, str]]


class LexiconEntry(BaseModel):
    urdu_script: str
    roman_urdu: str


_FEED = TypeAdapter(List[LexiconEntry])


def _empty_maps() -> LexiconMaps:
    return {Direction.SCRIPT_TO_ROMAN: {}, Direction.ROMAN_TO_SCRIPT: {}}


def build_maps(entries: List[LexiconEntry]) -> Tuple[LexiconMaps, LexiconMaps]:
    """
    Build (phrase maps, word maps) from feed entries. Later entries overwrite
    earlier ones on duplicate keys. Word maps only receive entries that are a
    single word on both sides.
    """
    phrases = _empty_maps()
    words = _empty_maps()
    for entry in entries:
        urdu = normalize_urdu(entry.urdu_script.strip())
        roman = entry.roman_urdu.strip().lower()
        if not urdu or not roman:
            continue
        phrases[Direction.SCRIPT_TO_ROMAN][urdu] = roman
        phrases[Direction.ROMAN_TO_SCRIPT][roman] = urdu
        urdu_words = urdu.split()
        roman_words = roman.split()
        if len(urdu_words) == 1 and len(roman_words) == 1:
            words[Direction.SCRIPT_TO_ROMAN][urdu_words[0]] = roman_words[0]
            words[Direction.ROMAN_TO_SCRIPT][roman_words[0]] = urdu_words[0]
    return phrases, words


class LexiconStore:
    """
    Lazily loaded lexicon.

    ``load`` is memoized by ``is_loaded`` without a lock: two concurrent first
    callers may both run the loader. Each run builds fresh maps from the feed
    and swaps them in whole, so redundant builds end in the same state.

    A feed that cannot be fetched or parsed leaves the store empty and
    unloaded; callers then fall back to rule-based transliteration.
    """

    def __init__(self, loader: Optional[LexiconLoader] = None):
        self._loader = loader
        self._phrases: LexiconMaps = _empty_maps()
        self._words: LexiconMaps = _empty_maps()
        self.is_loaded = False

    def __len__(self) -> int:
        return len(self._phrases[Direction.SCRIPT_TO_ROMAN])

    async def load(self) -> None:
        if self.is_loaded:
            return
        if self._loader is None:
            logging.debug("lexicon_load_skipped reason=no_loader")
            return
        start = time.perf_counter()
        try:
            raw = await self._loader()
            entries = _FEED.validate_python(raw)
            phrases, words = build_maps(entries)
        except Exception as e:
            logging.error("lexicon_load_failure error=%s", e)
            return
        self._phrases = phrases
        self._words = words
        self.is_loaded = True
        logging.info(
            "lexicon_loaded entries=%d urdu_to_roman=%d latency_ms=%.2f",
            len(entries),
            len(self),
            (time.perf_counter() - start) * 1000,
        )

    async def ensure_loaded(self) -> None:
        await self.load()

    def lookup_phrase(self, key: str, direction: Direction) -> Optional[str]:
        return self._phrases[direction].get(key)

    def lookup_word(self, key: str, direction: Direction) -> Optional[str]:
        # Single-token phrase keys (one Urdu word spelled as two Roman words,
        # for instance) also resolve at word level.
        found = self._words[direction].get(key)
        if found is None:
            found = self._phrases[direction].get(key)
        return found
