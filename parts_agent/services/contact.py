"""PartSelect contact details and when to offer them."""

from __future__ import annotations

from dataclasses import dataclass

from parts_agent.nlu.rules import contains, normalize, phrase

CONTACT_PHONE = "1-866-319-8402"
CONTACT_HOURS = "Monday to Saturday, 8am - 9pm EST"
CONTACT_WEBSITE = "https://www.partselect.com"

_USER_TRIGGERS = (
    phrase(
        "order",
        "shipping",
        "delivery",
        "track",
        "cancel",
        "return",
        "refund",
        "warranty",
        "failed",
        "error",
        "complex",
        "complicated",
        "difficult",
        "call",
        "phone",
        "human",
        "representative",
        "agent",
        "escalate",
        "supervisor",
        "manager",
    ),
    contains(
        "not working",
        "still broken",
        "doesnt work",
        "doesn't work",
        "help me install",
        "speak to someone",
        "verify compatibility",
        "double check",
        "make sure",
        "confirm fit",
        "specific model",
        "exact model",
    ),
)

_LIMITATION_PHRASES = contains(
    "contact partselect",
    "check with partselect",
    "partselect support",
    "verify with partselect",
    "complex installation",
    "technical support",
)


@dataclass(frozen=True, slots=True)
class ContactInfo:
    phone: str = CONTACT_PHONE
    hours: str = CONTACT_HOURS
    website: str = CONTACT_WEBSITE


class ContactService:
    """Decide when to append PartSelect contact details and render them."""

    def __init__(self, info: ContactInfo | None = None) -> None:
        self.info = info or ContactInfo()

    def should_show_contact(self, user_message: str, response_text: str) -> bool:
        message = normalize(user_message)
        if any(matcher(message) for matcher in _USER_TRIGGERS):
            return True
        return _LIMITATION_PHRASES(normalize(response_text))

    def format_contact_for_chat(self) -> str:
        info = self.info
        return (
            "For direct assistance with orders, technical support, or specific compatibility "
            "questions, you can contact PartSelect directly:\n\n"
            f"📞 **{info.phone}**\n"
            f"{info.hours}\n\n"
            f"🌐 **{info.website}**\n"
            "Live chat available on their website\n\n"
            "Their support team can help with:\n"
            "• Order status and shipping\n"
            "• Technical installation guidance\n"
            "• Specific model compatibility verification\n"
            "• Warranty and return questions\n"
            "• Complex troubleshooting beyond our scope"
        )

    def append_to(self, text: str) -> str:
        return f"{text}\n\n---\n\n{self.format_contact_for_chat()}"
