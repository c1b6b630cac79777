"""
Deterministic character tables and the rule-based transliterators for both
directions. These are the fallback when a word is not found in the lexicon.
"""
import re
from functools import lru_cache
from typing import Tuple

# do-chashmi heh, marks aspiration of the preceding consonant
ASPIRATOR = "ھ"

URDU_TO_ROMAN = {
    # letters
    "ا": "a",
    "آ": "aa",
    "أ": "a",
    "إ": "i",
    "ب": "b",
    "پ": "p",
    "ت": "t",
    "ٹ": "T",
    "ث": "s",
    "ج": "j",
    "چ": "ch",
    "ح": "h",
    "خ": "kh",
    "د": "d",
    "ڈ": "D",
    "ذ": "z",
    "ر": "r",
    "ڑ": "R",
    "ز": "z",
    "ژ": "zh",
    "س": "s",
    "ش": "sh",
    "ص": "s",
    "ض": "z",
    "ط": "t",
    "ظ": "z",
    "ع": "",
    "غ": "gh",
    "ف": "f",
    "ق": "q",
    "ک": "k",
    "گ": "g",
    "ل": "l",
    "م": "m",
    "ن": "n",
    "ں": "n",
    "و": "w",
    "ہ": "h",
    "ھ": "h",
    "ی": "y",
    "ے": "e",
    "ء": "'",
    # punctuation
    " ": " ",
    "۔": ".",
    "؟": "?",
    "،": ",",
    "؍": "/",
    "٪": "%",
}

# Uppercase keys are retroflex spellings; words are lower-cased before
# matching so only the lowercase keys are ever hit.
ROMAN_TO_URDU = {
    # vowels
    "aa": "آ",
    "a": "ا",
    "e": "ے",
    "i": "ی",
    "o": "و",
    "u": "و",
    # digraphs and aspirates
    "ch": "چ",
    "kh": "خ",
    "gh": "غ",
    "sh": "ش",
    "zh": "ژ",
    "th": "تھ",
    "ph": "پھ",
    "dh": "دھ",
    "rh": "ڑھ",
    "bh": "بھ",
    "jh": "جھ",
    "mh": "مھ",
    "nh": "نھ",
    # consonants
    "b": "ب",
    "p": "پ",
    "t": "ت",
    "T": "ٹ",
    "j": "ج",
    "h": "ہ",
    "d": "د",
    "D": "ڈ",
    "r": "ر",
    "R": "ڑ",
    "z": "ز",
    "s": "س",
    "f": "ف",
    "q": "ق",
    "k": "ک",
    "g": "گ",
    "l": "ل",
    "m": "م",
    "n": "ن",
    "w": "و",
    "y": "ی",
    # punctuation
    ".": "۔",
    "?": "؟",
    ",": "،",
    "/": "؍",
    "%": "٪",
    " ": " ",
}

# Longest keys first; sorted() is stable so equal-length keys keep table order
ROMAN_KEYS = tuple(sorted((k for k in ROMAN_TO_URDU if k != " "), key=len, reverse=True))

ROMAN_VOWEL_FALLBACK = {"a": "ا", "i": "ی", "u": "و", "o": "و", "e": "ے"}

ROMAN_TRAILING_PUNCT = re.compile(r"[.,!?;:]+$")
URDU_TRAILING_PUNCT = re.compile(r"[۔؟،؍٪]+$")

_ROMAN_PUNCT_TO_URDU = str.maketrans({".": "۔", "?": "؟", ",": "،"})
_URDU_PUNCT_TO_ROMAN = str.maketrans({"۔": ".", "؟": "?", "،": ","})

_CONSONANTS = "bcdfghjklmnpqrstvwxyzBCDFGHJKLMNPQRSTVWXYZ"
_W_BETWEEN_CONSONANTS = re.compile(rf"(?<=[{_CONSONANTS}])w(?=[{_CONSONANTS}])")
_Y_BETWEEN_CONSONANTS = re.compile(rf"(?<=[{_CONSONANTS}])y(?=[{_CONSONANTS}])")
_WHITESPACE = re.compile(r"\s+")
_EDGE_QUOTES = re.compile(r"^['\"\s]+|['\"\s]+$")


def apply_phonetic_rules(text: str) -> str:
    """Vowel-sound corrections on a romanized word, then whitespace and quote cleanup."""
    text = _W_BETWEEN_CONSONANTS.sub("o", text)
    text = _Y_BETWEEN_CONSONANTS.sub("i", text)
    text = _WHITESPACE.sub(" ", text)
    return _EDGE_QUOTES.sub("", text.strip())


@lru_cache(maxsize=4096)
def urdu_word_to_roman(word: str) -> str:
    """
    Romanize a single normalized Urdu word.

    A letter followed by do-chashmi heh becomes its mapping plus "h". Code
    points without a mapping (digits, foreign letters, and ain whose mapping
    is empty) pass through unchanged.
    """
    if not word:
        return ""
    out = []
    i = 0
    n = len(word)
    while i < n:
        ch = word[i]
        if i + 1 < n and word[i + 1] == ASPIRATOR:
            base = URDU_TO_ROMAN.get(ch)
            if base:
                out.append(base + "h")
                i += 2
                continue
        out.append(URDU_TO_ROMAN.get(ch) or ch)
        i += 1
    return apply_phonetic_rules("".join(out))


@lru_cache(maxsize=4096)
def roman_word_to_urdu(word: str) -> str:
    """
    Convert a single Roman Urdu word to Urdu script by greedy longest match.
    Trailing punctuation is stripped first and re-appended in Urdu form.
    """
    if not word:
        return ""
    match = ROMAN_TRAILING_PUNCT.search(word)
    punctuation = match.group(0) if match else ""
    clean = word[: len(word) - len(punctuation)].lower()

    out = []
    i = 0
    while i < len(clean):
        for key in ROMAN_KEYS:
            if clean.startswith(key, i):
                out.append(ROMAN_TO_URDU[key])
                i += len(key)
                break
        else:
            ch = clean[i]
            out.append(ROMAN_VOWEL_FALLBACK.get(ch, ch))
            i += 1
    return "".join(out) + punctuation.translate(_ROMAN_PUNCT_TO_URDU)


def split_urdu_punctuation(word: str) -> Tuple[str, str]:
    """Split an Urdu word into (stem, trailing punctuation)."""
    match = URDU_TRAILING_PUNCT.search(word)
    if not match:
        return word, ""
    return word[: match.start()], match.group(0)


def urdu_punctuation_to_roman(punctuation: str) -> str:
    return punctuation.translate(_URDU_PUNCT_TO_ROMAN)
