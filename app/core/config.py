import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_LEXICON_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "..", "data", "lexicon.json")


def _env_bool(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    MAX_TEXT_LEN: int = int(os.environ.get("MAX_TEXT_LEN", 5000))
    MAX_BATCH_ITEMS: int = int(os.environ.get("MAX_BATCH_ITEMS", 500))
    MAX_FILE_SIZE: int = int(os.environ.get("MAX_FILE_SIZE", 10 * 1024 * 1024))
    LEXICON_URL: str = os.environ.get("LEXICON_URL", "")
    LEXICON_PATH: str = os.environ.get("LEXICON_PATH", DEFAULT_LEXICON_PATH)
    # 0 disables the timeout on the lexicon fetch
    LEXICON_TIMEOUT_SECONDS: int = int(os.environ.get("LEXICON_TIMEOUT_SECONDS", 0))
    LEXICON_REMOTE: bool = bool(LEXICON_URL.strip())
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
    DEBUG: bool = _env_bool("DEBUG")


settings = Settings()
