"""Conversation turns, product references and memory state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


class ProductReference(BaseModel):
    """Catalog-backed summary of a part, rendered as a product card."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    part_number: str = Field(alias="partNumber", description="Canonical part number, e.g. PS11752778.")
    name: str = Field(description="Display name.")
    price: str = Field(description="Display price, e.g. $45.07.")
    image_url: str = Field(default="", alias="imageUrl", description="Image reference.")
    buy_link: str | None = Field(default=None, alias="buyLink", description="Optional purchase link.")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class MessageTurn:
    """Single conversational turn stored in memory."""

    conversation_id: str
    role: str
    content: str
    created_at: datetime = field(default_factory=_utcnow)
    product_cards: list[ProductReference] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_assistant(self) -> bool:
        return self.role == ROLE_ASSISTANT


@dataclass(slots=True)
class ConversationSnapshot:
    """Ordered view over the recent turns of one conversation."""

    conversation_id: str
    turns: list[MessageTurn] = field(default_factory=list)

    def last_assistant_turn(self) -> MessageTurn | None:
        for turn in reversed(self.turns):
            if turn.is_assistant:
                return turn
        return None

    def texts(self) -> list[str]:
        return [turn.content for turn in self.turns]
