"""Pytest unit test fixtures."""

import pytest

from parts_agent.memory.models import ConversationSnapshot, MessageTurn
from parts_agent.memory.store import SQLiteMemoryStore
from parts_agent.services.catalog import StaticCatalog


@pytest.fixture()
def memory_store(tmp_path):
    db_path = tmp_path / "memory.db"
    return SQLiteMemoryStore(db_path)


@pytest.fixture()
def catalog():
    return StaticCatalog()


@pytest.fixture()
def make_snapshot():
    def _make(*turns, conversation_id="conv-1"):
        return ConversationSnapshot(
            conversation_id=conversation_id,
            turns=[
                MessageTurn(
                    conversation_id=conversation_id,
                    role=turn.get("role", "user"),
                    content=turn["content"],
                    metadata=turn.get("metadata", {}),
                )
                for turn in turns
            ],
        )

    return _make
