import json
import pytest

from app.core.lexicon import LexiconStore
from app.services.transliteration import TransliterationService

from tests.helpers import static_loader


@pytest.fixture
def make_service():
    def _make(entries=None, loader=None):
        if loader is None:
            loader = static_loader(entries or [])
        return TransliterationService(LexiconStore(loader))

    return _make


@pytest.fixture
def lexicon_file(tmp_path):
    def _write(entries):
        path = tmp_path / "lexicon.json"
        path.write_text(json.dumps(entries, ensure_ascii=False), encoding="utf-8")
        return str(path)

    return _write
