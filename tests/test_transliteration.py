import asyncio

import pytest

from app.core.completeness import assess
from app.core.models import Completeness, Direction, Method
from app.services.batching import run_in_batches

from tests.helpers import failing_loader

S2R = Direction.SCRIPT_TO_ROMAN
R2S = Direction.ROMAN_TO_SCRIPT

SALAM = [{"urdu_script": "سلام", "roman_urdu": "salam"}]
LEXICON = SALAM + [
    {"urdu_script": "دل", "roman_urdu": "dil"},
    {"urdu_script": "خدا حافظ", "roman_urdu": "khuda hafiz"},
]


def run(coro):
    return asyncio.run(coro)


class TestScriptToRoman:
    def test_single_letter(self, make_service):
        result = run(make_service().transliterate("ب", S2R))
        assert result.transliterated_text == "b"
        assert result.method == Method.RULE_BASED

    def test_aspirated_pair(self, make_service):
        result = run(make_service().transliterate("بھ", S2R))
        assert result.transliterated_text == "bh"

    def test_hybrid_sentence(self, make_service):
        result = run(make_service(SALAM).transliterate("سلام دنیا", S2R))
        assert result.original_text == "سلام دنیا"
        assert result.transliterated_text == "salam dnya"
        assert result.method == Method.HYBRID
        assert result.completeness.is_complete
        assert result.completeness.untransliterated_count == 0
        assert result.completeness.total_words == 2

    def test_every_word_from_lexicon(self, make_service):
        result = run(make_service(LEXICON).transliterate("سلام دل", S2R))
        assert result.transliterated_text == "salam dil"
        assert result.method == Method.LEXICON

    def test_phrase_match(self, make_service):
        result = run(make_service(LEXICON).transliterate("خدا حافظ", S2R))
        assert result.transliterated_text == "khuda hafiz"
        assert result.method == Method.LEXICON
        assert result.completeness.total_words == 2

    def test_input_normalized_before_lookup(self, make_service):
        result = run(make_service(SALAM).transliterate("سَلام", S2R))
        assert result.original_text == "سَلام"
        assert result.transliterated_text == "salam"
        assert result.method == Method.LEXICON

    def test_trailing_punctuation_reattached(self, make_service):
        service = make_service(SALAM)
        lexicon_hit = run(service.transliterate("سلام۔", S2R))
        assert lexicon_hit.transliterated_text == "salam."
        assert lexicon_hit.method == Method.LEXICON
        rules = run(service.transliterate("دنیا؟", S2R))
        assert rules.transliterated_text == "dnya?"
        assert rules.method == Method.RULE_BASED

    def test_digits_fold(self, make_service):
        result = run(make_service().transliterate("٢٠٢٤", S2R))
        assert result.transliterated_text == "2024"
        assert result.completeness.is_complete

    def test_residual_script_reported(self, make_service):
        result = run(make_service().transliterate("علم", S2R))
        assert result.transliterated_text == "عlm"
        assert not result.completeness.is_complete
        assert result.completeness.untransliterated_parts == ("ع",)
        assert result.completeness.untransliterated_count == 1
        hash(result)

    def test_blank_input(self, make_service):
        result = run(make_service().transliterate("  ", S2R))
        assert result.transliterated_text == ""
        assert result.completeness.total_words == 0
        assert result.completeness.is_complete

    def test_direction_alias(self, make_service):
        result = run(make_service().transliterate("ب", "urdu-to-roman"))
        assert result.transliterated_text == "b"


class TestRomanToScript:
    def test_single_letter(self, make_service):
        result = run(make_service().transliterate("a", R2S))
        assert result.transliterated_text == "ا"
        assert result.method == Method.RULE_BASED
        assert result.completeness.is_complete

    def test_blank_input(self, make_service):
        result = run(make_service(SALAM).transliterate("   ", R2S))
        assert result.transliterated_text == ""
        assert result.completeness == Completeness(
            is_complete=True, untransliterated_parts=(), total_words=0, untransliterated_count=0
        )

    def test_lexicon_word_case_insensitive(self, make_service):
        result = run(make_service(SALAM).transliterate("Salam dunya", R2S))
        assert result.transliterated_text == "سلام دونیا"
        assert result.method == Method.HYBRID

    def test_phrase_match_case_insensitive(self, make_service):
        result = run(make_service(LEXICON).transliterate("  Khuda Hafiz ", R2S))
        assert result.transliterated_text == "خدا حافظ"
        assert result.method == Method.LEXICON

    def test_punctuation_only_handled_by_rules(self, make_service):
        result = run(make_service(SALAM).transliterate("salam.", R2S))
        assert result.transliterated_text == "سالام۔"
        assert result.method == Method.RULE_BASED

    def test_residual_latin_reported(self, make_service):
        result = run(make_service().transliterate("box", R2S))
        assert result.transliterated_text == "بوx"
        assert result.completeness.untransliterated_parts == ("x",)
        assert not result.completeness.is_complete


def test_deterministic(make_service):
    service = make_service(LEXICON)
    first = run(service.transliterate("سلام دنیا، خدا حافظ", S2R))
    second = run(service.transliterate("سلام دنیا، خدا حافظ", S2R))
    assert first == second


def test_failed_lexicon_is_rule_based_only(make_service):
    service = make_service(loader=failing_loader)
    for text in ["سلام دنیا", "سلام", "دل"]:
        result = run(service.transliterate(text, S2R))
        assert result.method == Method.RULE_BASED
    assert run(service.transliterate("سلام دنیا", S2R)).transliterated_text == "slam dnya"
    assert not service.lexicon.is_loaded


@pytest.mark.parametrize(
    "text, direction",
    [
        ("سلام دنیا", S2R),
        ("علم اور عمل", S2R),
        ("box fox", R2S),
        ("salam", R2S),
        ("", R2S),
    ],
)
def test_completeness_invariant(make_service, text, direction):
    completeness = run(make_service(SALAM).transliterate(text, direction)).completeness
    assert completeness.untransliterated_count == len(completeness.untransliterated_parts)
    assert completeness.is_complete == (completeness.untransliterated_count == 0)


def test_method_classification():
    assert Method.from_usage([]) == Method.RULE_BASED
    assert Method.from_usage([False, False]) == Method.RULE_BASED
    assert Method.from_usage([True, True]) == Method.LEXICON
    assert Method.from_usage([True, False]) == Method.HYBRID


def test_assess_counts_runs():
    completeness = assess("a b c", "x ب y بب", S2R)
    assert completeness.untransliterated_parts == ("ب", "بب")
    assert completeness.total_words == 3
    latin = assess("one two", "ab ا cd", R2S)
    assert latin.untransliterated_parts == ("ab", "cd")


def test_completeness_percentage():
    assert Completeness(False, ("x",), 4, 1).percentage == 75
    assert Completeness(False, ("x",), 4, 1).quality_level == "fair"
    assert Completeness(False, ("x",), 8, 1).percentage == 88
    assert Completeness(False, ("x",), 20, 1).quality_level == "excellent"
    assert Completeness(True).percentage == 100
    assert Completeness(False, ("x", "y"), 4, 2).quality_level == "poor"


class TestBatch:
    def test_order_and_progress(self, make_service):
        progress = []
        results = run(
            make_service(SALAM).transliterate_batch(
                ["ب", "بھ", "سلام", "دنیا", "دل"], S2R, batch_size=2, on_progress=progress.append
            )
        )
        assert [r.transliterated_text for r in results] == ["b", "bh", "salam", "dnya", "dl"]
        assert progress == pytest.approx([40, 80, 100])

    def test_order_preserved_under_uneven_latency(self):
        async def worker(n):
            await asyncio.sleep((10 - n) * 0.001)
            return n

        assert run(run_in_batches(list(range(10)), worker, batch_size=4)) == list(range(10))

    def test_empty_batch(self, make_service):
        progress = []
        assert run(make_service().transliterate_batch([], S2R, on_progress=progress.append)) == []
        assert progress == []

    def test_invalid_batch_size(self, make_service):
        with pytest.raises(ValueError):
            run(make_service().transliterate_batch(["ب"], S2R, batch_size=0))
