"""Turn orchestration: plan, dispatch, assemble, persist."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from parts_agent.assembler import ResponseAssembler
from parts_agent.core.metrics import MetricsCollector
from parts_agent.memory.models import ROLE_ASSISTANT, ROLE_USER, ConversationSnapshot, MessageTurn, ProductReference
from parts_agent.memory.store import MemoryStore
from parts_agent.planner.base import Planner
from parts_agent.planner.types import PlannerContext, PlannerDecision
from parts_agent.tools.router import ToolRouter

logger = logging.getLogger("parts_agent.chat")


@dataclass(slots=True)
class ChatResult:
    conversation_id: str
    text: str
    product_cards: list[ProductReference] = field(default_factory=list)
    decision: PlannerDecision | None = None


class ChatService:
    """Process one user turn end to end.

    Turns of the same conversation are serialised with a per-conversation
    lock so a later turn never reads history or persists before an earlier
    one has finished. The user turn and the reply are written together once
    the reply is ready.
    """

    def __init__(
        self,
        store: MemoryStore,
        planner: Planner,
        router: ToolRouter,
        assembler: ResponseAssembler,
        metrics: MetricsCollector,
        *,
        history_window: int = 10,
    ) -> None:
        self._store = store
        self._planner = planner
        self._router = router
        self._assembler = assembler
        self._metrics = metrics
        self._history_window = history_window
        # conversation id -> (lock, number of turns holding or waiting on it)
        self._locks: dict[str, tuple[asyncio.Lock, int]] = {}

    async def handle(self, conversation_id: str, message: str) -> ChatResult:
        lock, waiters = self._locks.get(conversation_id, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[conversation_id] = (lock, waiters + 1)
        try:
            async with lock:
                return await self._handle(conversation_id, message)
        finally:
            _, waiters = self._locks[conversation_id]
            if waiters == 1:
                del self._locks[conversation_id]
            else:
                self._locks[conversation_id] = (lock, waiters - 1)

    @property
    def active_conversations(self) -> int:
        """Number of conversations with a turn in progress or queued."""
        return len(self._locks)

    async def _handle(self, conversation_id: str, message: str) -> ChatResult:
        history = self._store.fetch_recent_turns(conversation_id, limit=self._history_window)
        snapshot = ConversationSnapshot(conversation_id=conversation_id, turns=list(history))
        turn = MessageTurn(conversation_id=conversation_id, role=ROLE_USER, content=message)

        decision = self._planner.decide(PlannerContext(turn=turn, conversation=snapshot))
        response = await self._router.dispatch(decision, turn, snapshot)
        reply = self._assembler.assemble(
            message,
            response,
            snapshot,
            purchase_intent=decision.purchase_intent,
        )

        strategy = response.strategy or decision.strategy
        assistant_turn = MessageTurn(
            conversation_id=conversation_id,
            role=ROLE_ASSISTANT,
            content=reply.text,
            product_cards=reply.product_cards,
            metadata={
                "strategy": strategy.value,
                "intent": decision.intent.value,
                "dialogue_state": response.dialogue_state.as_token() if response.dialogue_state else None,
            },
        )
        self._store.append_exchange(turn, assistant_turn)

        self._metrics.record_request(
            decision.intent.value,
            strategy.value,
            fell_through=response.fell_through,
        )
        logger.info(
            "Conversation %s answered by %s (intent=%s, cards=%d)",
            conversation_id,
            strategy.value,
            decision.intent.value,
            len(reply.product_cards),
        )

        return ChatResult(
            conversation_id=conversation_id,
            text=reply.text,
            product_cards=reply.product_cards,
            decision=decision,
        )
