import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from core.config import _reset_settings_cache_for_tests  # noqa: E402

RESOURCES = Path(__file__).resolve().parent / "resources"


@pytest.fixture(autouse=True)
def reset_settings_cache():
    _reset_settings_cache_for_tests()
    yield
    _reset_settings_cache_for_tests()


@pytest.fixture
def load_resource():
    def _load(name: str):
        with (RESOURCES / name).open("r", encoding="utf-8") as fh:
            return json.load(fh)

    return _load
