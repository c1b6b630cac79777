import re

TATWEEL = "\u0640"

# Arabic-Indic digit i folds to ASCII digit i
_DIGIT_FOLD = {0x0660 + i: str(i) for i in range(10)}

# Glyph variants folded to their Urdu code points
GLYPH_FOLD = {
    "ي": "ی",  # arabic yeh
    "ى": "ی",  # alef maksura
    "ؤ": "\u06cc\u0654",  # waw with hamza
    "ك": "ک",  # arabic kaf
    "ة": "ہ",  # teh marbuta
    "ۀ": "ہ",  # heh with yeh above
}

_FOLD_TABLE = dict(_DIGIT_FOLD)
_FOLD_TABLE[ord(TATWEEL)] = None
_FOLD_TABLE.update({ord(k): v for k, v in GLYPH_FOLD.items()})

DIACRITICS = re.compile(r"[\u064B-\u0652\u0670]")


def normalize_urdu(text: str) -> str:
    """
    Canonicalize Urdu script before lookup or rule-based transliteration:
    digits folded to ASCII, tatweel removed, glyph variants folded, and
    diacritics stripped.
    """
    if not text:
        return ""
    return DIACRITICS.sub("", text.translate(_FOLD_TABLE))
