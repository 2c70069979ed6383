"""Guided troubleshooting flows, declared as data.

Each flow is a small tree of steps. A step either asks a question (with the
canonical answers offered to the user) or states a result. Steps with
transitions expect an answer; steps without transitions are terminal. Every
terminal either confirms the problem is resolved or recommends a catalog part
and asks whether to order it or bring in a technician.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from parts_agent.nlu.rules import Matcher, normalize, pattern, phrase


@dataclass(frozen=True, slots=True)
class Transition:
    """Moves to ``target`` when any of ``phrases`` appears in the answer."""

    phrases: tuple[str, ...]
    target: str
    _matcher: Matcher = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_matcher", phrase(*self.phrases))

    def matches(self, answer: str) -> bool:
        return self._matcher(normalize(answer))


@dataclass(frozen=True, slots=True)
class Step:
    """One node of a flow.

    Question steps carry ``instruction``, ``question`` and ``options``; result
    and verification steps carry ``text``. Transitions are evaluated in order,
    so negative answers are listed before the positive ones they contain.
    """

    id: str
    text: str = ""
    instruction: str = ""
    question: str = ""
    options: tuple[str, ...] = ()
    transitions: tuple[Transition, ...] = ()
    parts: tuple[str, ...] = ()

    @property
    def terminal(self) -> bool:
        return not self.transitions

    @property
    def signature(self) -> str:
        """Distinctive text used to recognise this step in a transcript."""

        if self.question:
            return self.question
        return self.text.split("\n\n", 1)[0]

    def render(self) -> str:
        if not self.question:
            return self.text
        return f"{self.instruction}\n\n{self.question}\n\n{_pick_one(self.options)}"

    def next_step(self, answer: str) -> str | None:
        for transition in self.transitions:
            if transition.matches(answer):
                return transition.target
        return None


@dataclass(frozen=True, slots=True)
class Flow:
    """A guided diagnostic for one issue family of one appliance."""

    id: str
    appliance: str
    issue: str
    initial: str
    steps: Mapping[str, Step]
    fallback: str
    triggers: Matcher
    markers: tuple[str, ...]

    def step(self, step_id: str) -> Step | None:
        return self.steps.get(step_id)

    @property
    def initial_step(self) -> Step:
        return self.steps[self.initial]

    def opening(self) -> str:
        first = self.initial_step
        return (
            f"Let's figure out what's going on with your {self.appliance}. {first.instruction}\n\n"
            f"{first.question}\n\n"
            f"{_pick_one(first.options)}\n\n"
            "This'll help me get you the right fix."
        )


def _pick_one(options: tuple[str, ...]) -> str:
    bullets = "\n".join(f"• {option}" for option in options)
    return f"Pick one of these:\n{bullets}"


def _steps(*steps: Step) -> dict[str, Step]:
    return {step.id: step for step in steps}


def _verify(step_id: str, text: str, *, failed: str, resolved: str = "resolved") -> Step:
    """A step that asks whether the previous fix worked."""

    return Step(
        id=step_id,
        text=text,
        transitions=(
            Transition(
                (
                    "still not",
                    "not working",
                    "not draining",
                    "not clean",
                    "not cleaner",
                    "not making",
                    "not cold",
                    "still warm",
                    "didn't",
                    "did not",
                    "no",
                    "nope",
                ),
                failed,
            ),
            Transition(
                (
                    "fixed",
                    "working",
                    "draining",
                    "better",
                    "cleaner",
                    "cold",
                    "cooling",
                    "making ice",
                    "yes",
                    "yep",
                    "yeah",
                ),
                resolved,
            ),
        ),
    )


_ORDER_OR_TECHNICIAN = "or would you prefer a technician to take a look?"

DRAIN_FLOW = Flow(
    id="drain",
    appliance="dishwasher",
    issue="drainage",
    initial="filter",
    steps=_steps(
        Step(
            id="filter",
            instruction="Check the drain filter at the bottom of your dishwasher tub.",
            question="Is there visible food debris or buildup in the drain filter?",
            options=("Yes, lots of debris", "Some debris", "No debris visible"),
            transitions=(
                Transition(("lots of debris", "lots", "yes"), "filter_cleaned"),
                Transition(("some debris", "some", "a little"), "disposal_checked"),
                Transition(("no debris", "no", "none", "nothing", "clean"), "hose"),
            ),
        ),
        _verify(
            "filter_cleaned",
            "Clean that filter thoroughly with warm water and a soft brush. Remove all the food "
            "particles and grease buildup. Once it's clean, put it back and run a quick cycle to test.\n\n"
            "Did cleaning the filter fix the drainage issue?",
            failed="pumps",
        ),
        _verify(
            "disposal_checked",
            "Clean the filter and also check if your garbage disposal (if connected) is working "
            "properly. Run the disposal first, then test the dishwasher.\n\n"
            "After cleaning the filter and running the disposal, is the dishwasher draining better?",
            failed="pumps",
        ),
        Step(
            id="hose",
            text=(
                "Since the filter's clean, let's check the drain hose under your sink. Look for the "
                "dishwasher drain hose connection.\n\n"
                "Is the drain hose kinked, bent, or does it look clogged where it connects?"
            ),
            transitions=(
                Transition(("looks normal", "normal", "fine", "neither", "not kinked"), "pumps_hose_ok"),
                Transition(("kinked", "bent"), "hose_straightened"),
                Transition(("clogged", "blocked"), "hose_part"),
                Transition(("no", "nope"), "pumps_hose_ok"),
            ),
        ),
        _verify(
            "hose_straightened",
            "Straighten out that hose and make sure it has a smooth path. Avoid sharp bends. "
            "Test the dishwasher again.\n\n"
            "Is it draining properly now?",
            failed="pumps",
        ),
        Step(
            id="hose_part",
            text=(
                "The drain hose needs cleaning or replacement. Part PS11746240 is the drain hose "
                "assembly that should fix this. You can get it from PartSelect.\n\n"
                "Would you like to order the replacement hose, " + _ORDER_OR_TECHNICIAN
            ),
            parts=("PS11746240",),
        ),
        Step(
            id="pumps_hose_ok",
            text=(
                "If the filter and hose look good, the issue is likely the wash pump motor or drain "
                "pump. Part PS11756692 is the pump motor assembly, or PS11753379 is the drain pump.\n\n"
                "Would you like to order one of these parts, or would you prefer a technician to "
                "diagnose which pump needs replacement?"
            ),
            parts=("PS11756692", "PS11753379"),
        ),
        Step(
            id="pumps",
            text=(
                "Since basic cleaning didn't work, we need to check the pump system. The drain pump "
                "(PS11753379) or wash pump motor (PS11756692) likely needs replacement.\n\n"
                "Do you want to order one of these parts, or would you prefer a technician to "
                "diagnose which one exactly?"
            ),
            parts=("PS11753379", "PS11756692"),
        ),
        Step(
            id="resolved",
            text=(
                "Great! The drainage issue is fixed. To prevent this from happening again, clean the "
                "filter monthly and scrape food off dishes before loading.\n\n"
                "Is there anything else I can help you with?"
            ),
        ),
    ),
    fallback=(
        "Tell me more about what you're seeing with the drainage issue and I'll guide you to "
        "the next step."
    ),
    triggers=pattern(r"\bdrain|\bwater\b"),
    markers=("drain filter", "debris", "drainage issue"),
)

CLEANING_FLOW = Flow(
    id="cleaning",
    appliance="dishwasher",
    issue="cleaning performance",
    initial="loading",
    steps=_steps(
        Step(
            id="loading",
            instruction="Check your loading technique and detergent usage.",
            question="Are you using the correct amount of detergent and loading dishes properly?",
            options=("Yes, following guidelines", "Not sure about detergent", "Dishes might be overloaded"),
            transitions=(
                Transition(("not sure", "detergent"), "detergent_fixed"),
                Transition(("overloaded", "overload", "packed", "crowded"), "loading_fixed"),
                Transition(("yes", "following", "guidelines", "properly"), "spray_arms"),
            ),
        ),
        _verify(
            "detergent_fixed",
            "Use only dishwasher detergent (never hand soap) and follow the amount on the package. "
            "Also add rinse aid to help with drying and spotting.\n\n"
            "After using proper detergent and rinse aid, are the dishes coming out cleaner?",
            failed="wash_motor_part",
        ),
        _verify(
            "loading_fixed",
            "Load dishes with space between them so water can reach all surfaces. Don't nest "
            "utensils together - separate them in the basket.\n\n"
            "With better loading, are you getting better cleaning results?",
            failed="wash_motor_part",
        ),
        Step(
            id="spray_arms",
            instruction="Check the water temperature and spray arms.",
            question="Are the spray arms spinning freely and is your water heater set to 120°F?",
            options=("Spray arms blocked", "Water not hot enough", "Both seem fine"),
            transitions=(
                Transition(("blocked", "clogged", "stuck"), "spray_arms_cleaned"),
                Transition(("not hot", "hot enough", "cold", "lukewarm"), "water_temp_fixed"),
                Transition(("both seem fine", "seem fine", "both fine", "fine", "yes"), "wash_motor"),
            ),
        ),
        _verify(
            "spray_arms_cleaned",
            "Remove the spray arms and rinse them under hot water. Use a toothpick to clear any "
            "holes that are blocked with food or grease.\n\n"
            "After cleaning the spray arms, is the cleaning performance better?",
            failed="wash_motor_part",
        ),
        _verify(
            "water_temp_fixed",
            "Set your water heater to 120°F. Run hot water at your kitchen sink until it's steaming "
            "before starting the dishwasher.\n\n"
            "With hotter water, are the dishes getting cleaner?",
            failed="wash_motor_part",
        ),
        Step(
            id="wash_motor",
            text=(
                "Let's check the wash pump motor. If it's not creating enough pressure, dishes won't "
                "get clean. Part PS11756692 is the wash pump motor assembly.\n\n"
                "Are you hearing the wash motor running during the cycle, or is it unusually quiet?"
            ),
            transitions=(
                Transition(("quiet", "silent", "not running", "nothing", "no"), "wash_motor_part"),
                Transition(("running", "hear it", "humming", "loud", "yes"), "wash_motor_worn"),
            ),
        ),
        Step(
            id="wash_motor_part",
            text=(
                "Since the basics aren't fixing it, the wash pump motor likely needs replacement. "
                "Part PS11756692 should restore proper cleaning performance.\n\n"
                "Would you like to order the wash pump motor, " + _ORDER_OR_TECHNICIAN
            ),
            parts=("PS11756692",),
        ),
        Step(
            id="wash_motor_worn",
            text=(
                "If the motor runs but the dishes still come out dirty, the pump is probably worn and "
                "not building enough pressure. The pump and motor assembly (PS11756692) is the usual "
                "fix.\n\n"
                "Would you like to order it, " + _ORDER_OR_TECHNICIAN
            ),
            parts=("PS11756692",),
        ),
        Step(
            id="resolved",
            text=(
                "Excellent! The cleaning issue is resolved. Keep using proper detergent amounts and "
                "good loading techniques for best results.\n\n"
                "Anything else I can help you with?"
            ),
        ),
    ),
    fallback=(
        "Let me know what you're seeing with the cleaning performance and I'll help you with "
        "the next step."
    ),
    triggers=pattern(r"\bclean|\bwash(?:ing)?\b"),
    markers=("cleaning", "detergent"),
)

ICE_FLOW = Flow(
    id="ice",
    appliance="refrigerator",
    issue="ice maker",
    initial="power",
    steps=_steps(
        Step(
            id="power",
            instruction="Check the ice maker power and settings.",
            question="Is the ice maker switched ON and the wire arm in the DOWN position?",
            options=("Yes, both are correct", "No, one or both are off"),
            transitions=(
                Transition(("no", "off", "one or both", "not on", "up"), "power_fixed"),
                Transition(("yes", "both are correct", "correct", "on", "down"), "water_supply"),
            ),
        ),
        _verify(
            "power_fixed",
            "Turn on the ice maker and lower the wire arm. It can take up to 24 hours for ice "
            "production to begin.\n\n"
            "Once it's had time to cycle, is the ice maker making ice?",
            failed="water_supply",
        ),
        Step(
            id="water_supply",
            instruction="Check the water supply to your refrigerator.",
            question="Is water flowing to the water dispenser (if equipped)?",
            options=("Yes, water flows normally", "No water or very slow", "No water dispenser"),
            transitions=(
                Transition(
                    ("no water dispenser", "no dispenser", "don't have", "do not have"),
                    "water_line",
                ),
                Transition(("no water", "very slow", "slow", "trickle", "no"), "water_filter_part"),
                Transition(("yes", "flows", "normal", "normally", "fine"), "ice_maker_part"),
            ),
        ),
        Step(
            id="water_line",
            instruction="Check behind the refrigerator for water line connections.",
            question="Is the water line connected and the shut-off valve open?",
            options=("Connected and open", "Not connected", "Don't know"),
            transitions=(
                Transition(("not connected", "disconnected", "closed", "not open"), "line_fixed"),
                Transition(("don't know", "dont know", "not sure", "no idea"), "line_unknown"),
                Transition(("connected and open", "connected", "open", "yes"), "ice_maker_part"),
            ),
        ),
        Step(
            id="water_filter_part",
            text=(
                "Slow or no water usually means a clogged water filter. Replace the water filter "
                "(PS2179605) first. If the flow is still weak after that, the water inlet valve may "
                "need replacement.\n\n"
                "Would you like to order the water filter, " + _ORDER_OR_TECHNICIAN
            ),
            parts=("PS2179605",),
        ),
        Step(
            id="ice_maker_part",
            text=(
                "Since the power and water supply check out, the ice maker assembly (PS12584610) is "
                "likely faulty and needs replacement.\n\n"
                "Would you like to order the ice maker assembly, " + _ORDER_OR_TECHNICIAN
            ),
            parts=("PS12584610",),
        ),
        Step(
            id="line_unknown",
            text=(
                "Water line connections can be tricky to check. Have a technician inspect the line "
                "and shut-off valve. If those turn out fine, the ice maker assembly (PS12584610) is "
                "the usual culprit.\n\n"
                "Would you like to order the ice maker assembly, " + _ORDER_OR_TECHNICIAN
            ),
            parts=("PS12584610",),
        ),
        Step(
            id="line_fixed",
            text=(
                "Connect the water line and open the shut-off valve, then give it 24 hours for ice "
                "production to start.\n\n"
                "Is there anything else I can help you with?"
            ),
        ),
        Step(
            id="resolved",
            text=(
                "Great! Your ice maker is back in business. The first batch or two can be small, "
                "that's normal.\n\n"
                "Is there anything else I can help you with?"
            ),
        ),
    ),
    fallback=(
        "Let me help you continue troubleshooting the ice maker issue. What specifically is "
        "happening with it?"
    ),
    triggers=pattern(r"\bice\b|\bicemaker\b|\bmaker\b"),
    markers=("ice maker", "ice"),
)

COOLING_FLOW = Flow(
    id="cooling",
    appliance="refrigerator",
    issue="cooling",
    initial="settings",
    steps=_steps(
        Step(
            id="settings",
            instruction="Check the temperature settings and door seals.",
            question=(
                "Are the temperature settings correct (37°F fridge, 0°F freezer) and do the door "
                "seals close tightly?"
            ),
            options=("Settings and seals are good", "Temperature too high", "Door seals seem loose"),
            transitions=(
                Transition(("too high", "too warm", "wrong", "temperature"), "settings_fixed"),
                Transition(("loose", "torn", "cracked", "damaged", "gap"), "seal_part"),
                Transition(("good", "fine", "correct", "yes", "tight", "tightly"), "vents"),
            ),
        ),
        _verify(
            "settings_fixed",
            "Set the refrigerator to 37°F and the freezer to 0°F, then give it 24 hours to "
            "settle.\n\n"
            "After 24 hours, is it holding a cold temperature?",
            failed="cooling_parts",
        ),
        Step(
            id="seal_part",
            text=(
                "Loose or damaged door seals let cold air escape. Clean the seals with warm soapy "
                "water and look for cracks or tears. If the seal is damaged, the door gasket "
                "(PS2163382) is the fix.\n\n"
                "Would you like to order the door gasket, " + _ORDER_OR_TECHNICIAN
            ),
            parts=("PS2163382",),
        ),
        Step(
            id="vents",
            instruction="Check air circulation and vents.",
            question="Are the air vents inside blocked by food items?",
            options=("Yes, vents are blocked", "No, vents are clear"),
            transitions=(
                Transition(("not blocked", "clear", "no"), "cooling_parts"),
                Transition(("blocked", "yes", "covered"), "vents_cleared"),
            ),
        ),
        _verify(
            "vents_cleared",
            "Move anything blocking the vents so air can circulate freely, then give it 24 "
            "hours.\n\n"
            "Is it cooling properly now?",
            failed="cooling_parts",
        ),
        Step(
            id="cooling_parts",
            text=(
                "With the settings, seals and vents ruled out, the likely culprit is the evaporator "
                "fan motor (PS2355119) or the defrost heater (PS2071928).\n\n"
                "Would you like to order one of these parts, or would you prefer a technician to "
                "diagnose which one needs replacing?"
            ),
            parts=("PS2355119", "PS2071928"),
        ),
        Step(
            id="resolved",
            text=(
                "Great! Your refrigerator is cooling again. Keep the vents clear and check the door "
                "seals now and then.\n\n"
                "Is there anything else I can help you with?"
            ),
        ),
    ),
    fallback=(
        "Let me help you continue troubleshooting the cooling issue. What temperatures are you "
        "seeing?"
    ),
    triggers=pattern(r"\bcool|\bcold\b|temperature|\bwarm"),
    markers=("cooling", "temperature"),
)

FLOWS: dict[str, Flow] = {
    flow.id: flow for flow in (DRAIN_FLOW, CLEANING_FLOW, ICE_FLOW, COOLING_FLOW)
}
