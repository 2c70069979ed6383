"""Installation guides for catalog parts."""

from __future__ import annotations

from dataclasses import dataclass, field

from .catalog import Catalog


@dataclass(frozen=True, slots=True)
class InstallationStep:
    title: str
    description: str
    warning: str | None = None


@dataclass(frozen=True, slots=True)
class InstallationGuide:
    part_number: str
    part_name: str
    difficulty: str
    estimated_time: str
    tools_required: tuple[str, ...]
    steps: tuple[InstallationStep, ...]
    tips: tuple[str, ...] = field(default_factory=tuple)


_SPECIFIC_GUIDES: dict[str, InstallationGuide] = {
    guide.part_number: guide
    for guide in (
        InstallationGuide(
            part_number="PS11752778",
            part_name="Refrigerator Door Shelf Bin",
            difficulty="Easy",
            estimated_time="Under 5 minutes",
            tools_required=("None - snap-in replacement",),
            steps=(
                InstallationStep(
                    "Remove Old Bin",
                    "Lift the damaged bin straight up and out of the door brackets. It should come out easily.",
                ),
                InstallationStep(
                    "Clean the Area",
                    "Wipe down the door brackets where the bin sits to remove any debris or spills.",
                ),
                InstallationStep(
                    "Install New Bin",
                    "Align the new bin with the door brackets and press down firmly until it clicks securely into place.",
                ),
                InstallationStep(
                    "Test Installation",
                    "Gently pull on the bin to ensure it's properly seated and won't fall out.",
                ),
            ),
            tips=(
                "This is a genuine OEM part ensuring proper fit",
                "No tools required - simple snap-in replacement",
                "Make sure door is fully open for easy access",
            ),
        ),
        InstallationGuide(
            part_number="PS11756692",
            part_name="Dishwasher Pump and Motor Assembly",
            difficulty="Moderate",
            estimated_time="30-60 minutes",
            tools_required=("Phillips screwdriver", "Small flathead screwdriver", "Pliers for hose clamps"),
            steps=(
                InstallationStep(
                    "Safety First",
                    "Turn off power to dishwasher at breaker and shut off water supply.",
                    warning="Always disconnect power before servicing appliances",
                ),
                InstallationStep(
                    "Access the Pump",
                    "Remove the bottom dish rack and unscrew the spray arm. Remove the filter assembly to access the sump.",
                ),
                InstallationStep(
                    "Document Connections",
                    "Take photos of all wire connections and hose attachments before removal.",
                ),
                InstallationStep(
                    "Remove Old Pump",
                    "Disconnect electrical connections and hose clamps. Lift out the old pump assembly.",
                ),
                InstallationStep(
                    "Install New Pump",
                    "Position new pump, reconnect hoses with new clamps, and attach electrical connections.",
                ),
                InstallationStep(
                    "Test Operation",
                    "Restore power and water. Run a test cycle to verify proper operation.",
                ),
            ),
            tips=(
                "Lubricate gasket with rinse aid for easier fitting",
                "May require two people for final seating",
                "Keep photos handy for reference during reassembly",
            ),
        ),
        InstallationGuide(
            part_number="PS12584610",
            part_name="Refrigerator Ice Maker Assembly",
            difficulty="Moderate",
            estimated_time="25-45 minutes",
            tools_required=("Phillips screwdriver", "Nut driver set"),
            steps=(
                InstallationStep(
                    "Safety Preparation",
                    "Unplug refrigerator and turn off water supply to ice maker.",
                    warning="Always disconnect power before servicing",
                ),
                InstallationStep("Remove Ice Bin", "Pull out the ice storage bin and set aside."),
                InstallationStep(
                    "Disconnect Old Ice Maker",
                    "Unplug wire harness and disconnect water line. Remove mounting screws.",
                ),
                InstallationStep(
                    "Install New Assembly",
                    "Mount new ice maker with screws, reconnect water line and wire harness.",
                ),
                InstallationStep(
                    "Test Installation",
                    "Restore power and water. Allow 24 hours for first ice production.",
                ),
            ),
            tips=(
                "Wire harness from original unit may need to be reused",
                "Allow 24 hours for first ice cycle",
                "Check for water leaks after installation",
            ),
        ),
        InstallationGuide(
            part_number="PS11753379",
            part_name="Dishwasher Drain Pump 120V 60Hz",
            difficulty="Moderate",
            estimated_time="30-45 minutes",
            tools_required=("Phillips screwdriver", "Pliers for hose clamps", "Towels"),
            steps=(
                InstallationStep(
                    "Safety First",
                    "Disconnect power and water supply to the dishwasher.",
                    warning="Always disconnect power before servicing appliances",
                ),
                InstallationStep(
                    "Access the Sump",
                    "Remove the bottom dish rack, spray arm and filter assembly to reach the drain pump.",
                ),
                InstallationStep(
                    "Remove Old Pump",
                    "Disconnect the wire connectors, remove the hose clamps and mounting screws, then lift out the old pump.",
                ),
                InstallationStep(
                    "Install New Pump",
                    "Install the new pump in reverse order and reconnect all hoses and wires.",
                ),
                InstallationStep(
                    "Test Operation",
                    "Restore power and water, then run a short cycle and check for leaks.",
                ),
            ),
            tips=("Keep towels handy for residual water in the sump",),
        ),
    )
}

_GENERIC_STEPS = (
    InstallationStep("Safety First", "Disconnect power and water supply before beginning work."),
    InstallationStep("Access the Component", "Remove necessary panels or components to access the part."),
    InstallationStep("Remove Old Part", "Carefully disconnect all connections and remove the old part."),
    InstallationStep("Install New Part", "Install the new part following reverse of removal procedure."),
    InstallationStep("Test Operation", "Restore power and test to ensure proper operation."),
)


class InstallationGuideService:
    """Resolve installation guides for catalog parts."""

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def get_installation_guide(self, part_number: str) -> InstallationGuide | None:
        """Return the guide for ``part_number``.

        Parts without a dedicated guide get a generic one; parts unknown to the
        catalog get ``None``.
        """

        part = self._catalog.get_part_data(part_number)
        if part is None:
            return None

        specific = _SPECIFIC_GUIDES.get(part.part_number)
        if specific is not None:
            return specific

        return InstallationGuide(
            part_number=part.part_number,
            part_name=part.name,
            difficulty="Moderate",
            estimated_time="30-60 minutes",
            tools_required=("Basic hand tools",),
            steps=_GENERIC_STEPS,
            tips=(
                "Take photos before disassembly for reference",
                "Check warranty status before starting repairs",
            ),
        )


def render_full(guide: InstallationGuide) -> str:
    lines = [
        f"**Installation Guide for {guide.part_name} ({guide.part_number})**",
        f"**Difficulty:** {guide.difficulty} • **Time:** {guide.estimated_time}",
        f"**Tools:** {', '.join(guide.tools_required)}",
        "",
        "**Steps:**",
    ]
    for number, step in enumerate(guide.steps, start=1):
        line = f"{number}. **{step.title}**: {step.description}"
        if step.warning:
            line += f" ⚠️ {step.warning}"
        lines.append(line)
    if guide.tips:
        lines.append("")
        lines.append(f"**Tips:** {' • '.join(guide.tips)}")
    return "\n".join(lines)


def render_summary(guide: InstallationGuide) -> str:
    tools = ", ".join(guide.tools_required)
    return (
        f"Installing the {guide.part_name} ({guide.part_number}) is rated {guide.difficulty.lower()} "
        f"and takes about {guide.estimated_time.lower()}. Tools: {tools}. "
        "Make sure to disconnect power (and water if applicable) before you start."
    )
