import sys
from pathlib import Path

import pytest

# Ensure the `mapsearch` package is importable when running pytest from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mapsearch.core import config  # noqa: E402

_ENV_VARS = (
    "GOOGLE_API_KEY",
    "MAPSEARCH_RADIUS_MILES",
    "MAPSEARCH_PAGE_DELAY",
    "MAPSEARCH_REQUEST_TIMEOUT",
    "MAPSEARCH_HTTP_RETRIES",
    "MAPSEARCH_MAX_PAGES",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()
