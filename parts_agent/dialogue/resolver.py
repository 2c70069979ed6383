"""Dialogue state resolution for the guided troubleshooting flows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from parts_agent.memory.models import MessageTurn
from parts_agent.nlu.intents import has_purchase_intent
from parts_agent.nlu.rules import normalize, phrase

from .flows import FLOWS, Flow, Step

logger = logging.getLogger("parts_agent.dialogue")

GENERIC_TROUBLESHOOTING_PROMPT = (
    "I can help troubleshoot this issue. Please provide more details about what's happening "
    "with your appliance."
)

_MENTIONS_DISHWASHER = phrase("dishwasher", "dishwashers")
_MENTIONS_REFRIGERATOR = phrase("refrigerator", "fridge", "freezer", "ice maker", "icemaker")


@dataclass(frozen=True, slots=True)
class DialogueState:
    """Position within a guided flow."""

    flow: str
    step: str

    def as_token(self) -> dict[str, str]:
        return {"flow": self.flow, "step": self.step}

    @classmethod
    def from_token(cls, token: Any) -> "DialogueState | None":
        if not isinstance(token, Mapping):
            return None
        flow, step = token.get("flow"), token.get("step")
        if not isinstance(flow, str) or not isinstance(step, str):
            return None
        return cls(flow=flow, step=step)


@dataclass(frozen=True, slots=True)
class Handled:
    """The flow produced the reply for this turn."""

    text: str
    state: DialogueState | None = None


@dataclass(frozen=True, slots=True)
class NotApplicable:
    """The flow declined the turn; the caller should try the next strategy."""

    reason: str


FlowOutcome = Handled | NotApplicable


def lookup(state: DialogueState) -> tuple[Flow, Step] | None:
    flow = FLOWS.get(state.flow)
    if flow is None:
        return None
    step = flow.step(state.step)
    if step is None:
        return None
    return flow, step


def resolve_state(turns: Sequence[MessageTurn]) -> DialogueState | None:
    """Return the active, non-terminal flow position implied by the last assistant turn.

    Turns written by this service carry an explicit ``dialogue_state`` token in
    their metadata. Older transcripts without metadata are matched against the
    step prompts and, failing that, the flow marker phrases.
    """

    last = _last_assistant_turn(turns)
    if last is None:
        return None

    if "strategy" in last.metadata:
        state = DialogueState.from_token(last.metadata.get("dialogue_state"))
        return state if state is not None and _is_active(state) else None

    return _infer_from_text(last.content)


def expects_answer(state: DialogueState, message: str) -> bool:
    """Whether ``message`` answers the question asked at ``state``."""

    resolved = lookup(state)
    if resolved is None:
        return False
    _, step = resolved
    return step.next_step(message) is not None


def select_flow(message: str, history: Sequence[str] = ()) -> Flow | None:
    """Pick the flow for a new troubleshooting request, or None when no symptom matches."""

    text = normalize(message)
    context = normalize(" ".join(history))

    if _MENTIONS_DISHWASHER(text):
        appliances: tuple[str, ...] = ("dishwasher",)
    elif _MENTIONS_REFRIGERATOR(text):
        appliances = ("refrigerator",)
    elif _MENTIONS_DISHWASHER(context):
        appliances = ("dishwasher", "refrigerator")
    else:
        appliances = ("refrigerator", "dishwasher")

    for appliance in appliances:
        for flow in FLOWS.values():
            if flow.appliance == appliance and flow.triggers(text):
                return flow
    return None


def start_flow(message: str, history: Sequence[str] = ()) -> FlowOutcome:
    if has_purchase_intent(normalize(message)):
        return NotApplicable("purchase_intent")

    flow = select_flow(message, history)
    if flow is None:
        return Handled(GENERIC_TROUBLESHOOTING_PROMPT)

    logger.debug("Starting %s flow", flow.id)
    return Handled(flow.opening(), DialogueState(flow.id, flow.initial))


def continue_flow(state: DialogueState, message: str) -> FlowOutcome:
    """Advance ``state`` with the user's answer.

    An answer that matches none of the step's transitions keeps the current
    state and returns the flow's prompt for more detail.
    """

    if has_purchase_intent(normalize(message)):
        return NotApplicable("purchase_intent")

    resolved = lookup(state)
    if resolved is None:
        return NotApplicable("unknown_state")
    flow, step = resolved

    target = step.next_step(message)
    if target is None:
        return Handled(flow.fallback, state)

    logger.debug("Flow %s: %s -> %s", flow.id, step.id, target)
    return Handled(flow.steps[target].render(), DialogueState(flow.id, target))


def _last_assistant_turn(turns: Sequence[MessageTurn]) -> MessageTurn | None:
    for turn in reversed(turns):
        if turn.is_assistant:
            return turn
    return None


def _is_active(state: DialogueState) -> bool:
    resolved = lookup(state)
    return resolved is not None and not resolved[1].terminal


def _infer_from_text(text: str) -> DialogueState | None:
    for flow in FLOWS.values():
        for step in flow.steps.values():
            if step.signature and step.signature in text:
                return None if step.terminal else DialogueState(flow.id, step.id)

    lowered = normalize(text)
    for flow in FLOWS.values():
        if phrase(*flow.markers)(lowered):
            return DialogueState(flow.id, flow.initial)
    return None
