"""Conversation memory abstractions and SQLite implementation."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Sequence

import sqlite3

from parts_agent.core.db import sqlite_connection

from .models import ConversationSnapshot, MessageTurn, ProductReference


class MemoryStore(ABC):
    """Abstract interface for reading and writing conversation memory.

    Implementations must preserve insertion order per conversation: turns are
    returned in the order they were written, regardless of their timestamps.
    """

    @abstractmethod
    def get_conversation(self, conversation_id: str) -> str | None:
        """Return the conversation id if it exists."""

    @abstractmethod
    def create_conversation(self, conversation_id: str) -> str:
        """Create a conversation (no-op when it already exists)."""

    @abstractmethod
    def get_messages(self, conversation_id: str) -> Sequence[MessageTurn]:
        """Return every turn of a conversation in insertion order."""

    @abstractmethod
    def create_message(self, turn: MessageTurn) -> None:
        """Persist a single conversational turn."""

    @abstractmethod
    def append_exchange(self, user_turn: MessageTurn, assistant_turn: MessageTurn) -> None:
        """Persist a user turn and its reply atomically."""

    @abstractmethod
    def fetch_recent_turns(self, conversation_id: str, limit: int = 10) -> Sequence[MessageTurn]:
        """Return the most recent turns for a conversation, oldest first."""

    @abstractmethod
    def iter_conversations(self) -> Iterable[str]:
        """Iterate over known conversation identifiers."""

    def load_snapshot(self, conversation_id: str, limit: int = 10) -> ConversationSnapshot:
        """Return a snapshot of the recent turns of a conversation."""

        turns = self.fetch_recent_turns(conversation_id, limit=limit)
        return ConversationSnapshot(conversation_id=conversation_id, turns=list(turns))


class SQLiteMemoryStore(MemoryStore):
    """SQLite-backed memory store."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        """Create required tables if they do not exist."""

        with sqlite_connection(self.db_path) as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS conversations (
                    conversation_id TEXT PRIMARY KEY,
                    created_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS messages (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    conversation_id TEXT NOT NULL,
                    role TEXT NOT NULL,
                    content TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    product_cards TEXT,
                    metadata TEXT,
                    FOREIGN KEY (conversation_id) REFERENCES conversations (conversation_id)
                        ON DELETE CASCADE
                );

                CREATE INDEX IF NOT EXISTS idx_messages_conversation_id
                    ON messages (conversation_id, id);
                """
            )

    def get_conversation(self, conversation_id: str) -> str | None:
        with sqlite_connection(self.db_path) as conn:
            row = conn.execute(
                "SELECT conversation_id FROM conversations WHERE conversation_id = ?",
                (conversation_id,),
            ).fetchone()
        return row["conversation_id"] if row else None

    def create_conversation(self, conversation_id: str) -> str:
        with sqlite_connection(self.db_path) as conn:
            _insert_conversation(conn, conversation_id)
        return conversation_id

    def get_messages(self, conversation_id: str) -> Sequence[MessageTurn]:
        with sqlite_connection(self.db_path) as conn:
            rows = conn.execute(
                """
                SELECT conversation_id, role, content, created_at, product_cards, metadata
                FROM messages
                WHERE conversation_id = ?
                ORDER BY id ASC
                """,
                (conversation_id,),
            ).fetchall()
        return [_row_to_turn(row) for row in rows]

    def create_message(self, turn: MessageTurn) -> None:
        with sqlite_connection(self.db_path) as conn:
            _insert_conversation(conn, turn.conversation_id)
            _insert_message(conn, turn)

    def append_exchange(self, user_turn: MessageTurn, assistant_turn: MessageTurn) -> None:
        if user_turn.conversation_id != assistant_turn.conversation_id:
            raise ValueError("Both turns of an exchange must belong to the same conversation")

        with sqlite_connection(self.db_path) as conn:
            _insert_conversation(conn, user_turn.conversation_id)
            _insert_message(conn, user_turn)
            _insert_message(conn, assistant_turn)

    def fetch_recent_turns(self, conversation_id: str, limit: int = 10) -> Sequence[MessageTurn]:
        with sqlite_connection(self.db_path) as conn:
            rows = conn.execute(
                """
                SELECT conversation_id, role, content, created_at, product_cards, metadata
                FROM messages
                WHERE conversation_id = ?
                ORDER BY id DESC
                LIMIT ?
                """,
                (conversation_id, limit),
            ).fetchall()

        turns = [_row_to_turn(row) for row in rows]
        turns.reverse()
        return turns

    def iter_conversations(self) -> Iterable[str]:
        with sqlite_connection(self.db_path) as conn:
            rows = conn.execute("SELECT conversation_id FROM conversations ORDER BY conversation_id")
            return [row["conversation_id"] for row in rows]


def _insert_conversation(conn: sqlite3.Connection, conversation_id: str) -> None:
    conn.execute(
        "INSERT OR IGNORE INTO conversations(conversation_id, created_at) VALUES (?, ?)",
        (conversation_id, datetime.now(timezone.utc).isoformat()),
    )


def _insert_message(conn: sqlite3.Connection, turn: MessageTurn) -> None:
    conn.execute(
        """
        INSERT INTO messages (conversation_id, role, content, created_at, product_cards, metadata)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (
            turn.conversation_id,
            turn.role,
            turn.content,
            turn.created_at.isoformat(),
            json_dumps([card.model_dump(by_alias=True) for card in turn.product_cards]),
            json_dumps(turn.metadata),
        ),
    )


def _row_to_turn(row: sqlite3.Row) -> MessageTurn:
    cards = json_loads(row["product_cards"] or "[]")
    return MessageTurn(
        conversation_id=row["conversation_id"],
        role=row["role"],
        content=row["content"],
        created_at=datetime.fromisoformat(row["created_at"]),
        product_cards=[ProductReference.model_validate(card) for card in cards],
        metadata=json_loads(row["metadata"] or "{}"),
    )


def json_dumps(payload: Any) -> str:
    return json.dumps(payload, separators=(",", ":"))


def json_loads(value: str) -> Any:
    return json.loads(value)
