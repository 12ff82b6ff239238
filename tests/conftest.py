import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storage.migrate import migrate
from config.settings import settings
from config.registry import ASSESS_KEY, EXTRACT_KEY, HINT_KEY, POLISH_KEY, bind_model, unbind_model


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch):
    td = tempfile.TemporaryDirectory()
    db_path = os.path.join(td.name, "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    monkeypatch.setattr(settings, "CHECKPOINT_DIR", os.path.join(td.name, "checkpoints"), raising=False)
    migrate(db_path)
    try:
        yield
    finally:
        td.cleanup()


@pytest.fixture(autouse=True)
def clean_registry():
    yield
    for key in (ASSESS_KEY, EXTRACT_KEY, HINT_KEY, POLISH_KEY):
        unbind_model(key)


@pytest.fixture
def fake_models():
    bind_model(
        ASSESS_KEY,
        lambda **kwargs: {
            "dimension_scores": {d["name"]: 4 for d in kwargs["inputs"]["dimensions"]},
            "feedback": "Clear structure and a confident recommendation.",
            "strengths": ["Structured segmentation"],
            "improvements": ["Quantify the opportunity"],
        },
    )
    bind_model(HINT_KEY, lambda **kwargs: {"hint": f"Level {kwargs['inputs']['level']} hint."})
    return True
