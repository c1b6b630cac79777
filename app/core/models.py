"""
Core value types shared by the transliteration pipeline.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class Direction(str, Enum):
    SCRIPT_TO_ROMAN = "script-to-roman"
    ROMAN_TO_SCRIPT = "roman-to-script"

    @classmethod
    def _missing_(cls, value):
        # Tags used by the web front end
        aliases = {
            "urdu-to-roman": cls.SCRIPT_TO_ROMAN,
            "ur-to-en": cls.SCRIPT_TO_ROMAN,
            "roman-to-urdu": cls.ROMAN_TO_SCRIPT,
            "en-to-ur": cls.ROMAN_TO_SCRIPT,
        }
        if isinstance(value, str):
            return aliases.get(value.strip().lower())
        return None


class Method(str, Enum):
    LEXICON = "lexicon"
    RULE_BASED = "rule-based"
    HYBRID = "hybrid"

    @classmethod
    def from_usage(cls, used_lexicon: List[bool]) -> "Method":
        """Classify a run of per-word lookups: all lexicon, none, or a mix."""
        if used_lexicon and all(used_lexicon):
            return cls.LEXICON
        if any(used_lexicon):
            return cls.HYBRID
        return cls.RULE_BASED


@dataclass(frozen=True)
class Completeness:
    is_complete: bool
    untransliterated_parts: Tuple[str, ...] = ()
    total_words: int = 0
    untransliterated_count: int = 0

    @property
    def percentage(self) -> int:
        if self.total_words <= 0:
            return 100
        # half-up, not banker's rounding
        return math.floor((self.total_words - self.untransliterated_count) / self.total_words * 100 + 0.5)

    @property
    def quality_level(self) -> str:
        pct = self.percentage
        if pct >= 95:
            return "excellent"
        if pct >= 80:
            return "good"
        if pct >= 60:
            return "fair"
        return "poor"


@dataclass(frozen=True)
class TransliterationResult:
    original_text: str
    transliterated_text: str
    method: Method
    completeness: Completeness
