"""Human handoff ticketing with a persisted, per-conversation idempotency key."""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from parts_agent.core.db import sqlite_connection

logger = logging.getLogger("parts_agent.handoff")

DUPLICATE_TICKET_MESSAGE = (
    "A support ticket ({ticket_id}) has already been created for this conversation. You can "
    "reference it if you need to follow up. Is there anything else I can help you with while "
    "you wait?"
)


@dataclass(frozen=True, slots=True)
class HandoffRequest:
    conversation_id: str
    user_message: str
    reason: str


@dataclass(frozen=True, slots=True)
class HandoffResult:
    success: bool
    message: str
    ticket_id: str | None = None


class HandoffService:
    """Create at most one support ticket per conversation.

    The ``handoff_tickets`` table is keyed by conversation id, so a second
    request for the same conversation never creates a second ticket, across
    concurrent requests and process restarts alike.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        with sqlite_connection(self.db_path) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS handoff_tickets (
                    conversation_id TEXT PRIMARY KEY,
                    ticket_id TEXT NOT NULL,
                    reason TEXT NOT NULL,
                    user_message TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
                """
            )

    def request_human_support(self, request: HandoffRequest) -> HandoffResult:
        ticket_id = _new_ticket_id()
        with sqlite_connection(self.db_path) as conn:
            cursor = conn.execute(
                """
                INSERT OR IGNORE INTO handoff_tickets
                    (conversation_id, ticket_id, reason, user_message, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    request.conversation_id,
                    ticket_id,
                    request.reason,
                    request.user_message,
                    datetime.now(timezone.utc).isoformat(),
                ),
            )
            created = cursor.rowcount == 1
            if not created:
                row = conn.execute(
                    "SELECT ticket_id FROM handoff_tickets WHERE conversation_id = ?",
                    (request.conversation_id,),
                ).fetchone()
                ticket_id = row["ticket_id"]

        if not created:
            logger.info(
                "Handoff already requested for conversation %s (ticket %s)",
                request.conversation_id,
                ticket_id,
            )
            return HandoffResult(
                success=False,
                ticket_id=ticket_id,
                message=DUPLICATE_TICKET_MESSAGE.format(ticket_id=ticket_id),
            )

        logger.info(
            "Created handoff ticket %s for conversation %s (%s)",
            ticket_id,
            request.conversation_id,
            request.reason,
        )
        return HandoffResult(
            success=True,
            ticket_id=ticket_id,
            message=(
                f"I've created support ticket {ticket_id} for you. One of our technical specialists "
                "will reach out within 2 hours during business hours (8 AM - 9 PM EST). You can "
                "reference this ticket number if you need to follow up. Is there anything else I "
                "can help you with in the meantime?"
            ),
        )

    def ticket_for(self, conversation_id: str) -> str | None:
        with sqlite_connection(self.db_path) as conn:
            row = conn.execute(
                "SELECT ticket_id FROM handoff_tickets WHERE conversation_id = ?",
                (conversation_id,),
            ).fetchone()
        return row["ticket_id"] if row else None


def _new_ticket_id() -> str:
    return f"TKT-{secrets.randbelow(900000) + 100000}"
