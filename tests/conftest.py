from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

import pytest

# The app builds its singletons at import time, so point them at a scratch
# database and force simulated assistant replies before any test imports it.
_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="parts-agent-tests-"))
os.environ["SQLITE_PATH"] = str(_TEST_DATA_DIR / "conversations.db")
os.environ["LLM_API_KEY"] = ""
os.environ["DEEPSEEK_API_KEY"] = ""


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def chat_messages(fixtures_dir: Path) -> dict:
    return json.loads((fixtures_dir / "chat_messages.json").read_text(encoding="utf-8"))


@pytest.fixture
def drain_transcript(fixtures_dir: Path) -> list[dict]:
    return json.loads((fixtures_dir / "drain_transcript.json").read_text(encoding="utf-8"))
