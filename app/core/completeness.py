import re

from app.core.models import Completeness, Direction

# Arabic, Arabic Supplement, Arabic Extended-A, Presentation Forms A and B
URDU_RUN = re.compile(r"[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]+")
LATIN_RUN = re.compile(r"[A-Za-z]+")

_RESIDUAL = {
    Direction.SCRIPT_TO_ROMAN: URDU_RUN,
    Direction.ROMAN_TO_SCRIPT: LATIN_RUN,
}


def assess(original: str, transliterated: str, direction: Direction) -> Completeness:
    """
    Find runs of source-script characters left in the output. Each maximal
    run counts as one untransliterated part.
    """
    parts = _RESIDUAL[direction].findall(transliterated or "")
    return Completeness(
        is_complete=not parts,
        untransliterated_parts=tuple(parts),
        total_words=len((original or "").split()),
        untransliterated_count=len(parts),
    )
