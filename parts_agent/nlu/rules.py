"""Ordered rule tables evaluated by a single generic matcher.

A rule pairs a tag with a predicate over normalised (lowercased) text. Tables
are plain sequences, so precedence is the order of the rules in the table and
each rule can be exercised on its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

Matcher = Callable[[str], bool]

_QUOTE_TRANSLATION = str.maketrans({
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
})


def normalize(text: str | None) -> str:
    """Lowercase ``text`` and fold typographic quotes into ASCII ones."""

    if not text:
        return ""
    return text.translate(_QUOTE_TRANSLATION).lower()


@dataclass(frozen=True, slots=True)
class Rule:
    """A tagged predicate in an ordered rule table."""

    tag: str
    matcher: Matcher

    def matches(self, text: str) -> bool:
        return self.matcher(text)


def phrase(*phrases: str) -> Matcher:
    """Match any of ``phrases`` as whole words (``get`` does not match ``together``)."""

    compiled = re.compile(
        "|".join(rf"(?<!\w){re.escape(item.lower())}(?!\w)" for item in phrases)
    )

    def _match(text: str) -> bool:
        return compiled.search(text) is not None

    return _match


def contains(*fragments: str) -> Matcher:
    """Match any of ``fragments`` as raw substrings."""

    lowered = tuple(item.lower() for item in fragments)

    def _match(text: str) -> bool:
        return any(fragment in text for fragment in lowered)

    return _match


def pattern(regex: str, flags: int = re.IGNORECASE) -> Matcher:
    compiled = re.compile(regex, flags)

    def _match(text: str) -> bool:
        return compiled.search(text) is not None

    return _match


def any_of(*matchers: Matcher) -> Matcher:
    def _match(text: str) -> bool:
        return any(matcher(text) for matcher in matchers)

    return _match


def all_of(*matchers: Matcher) -> Matcher:
    def _match(text: str) -> bool:
        return all(matcher(text) for matcher in matchers)

    return _match


def none_of(*matchers: Matcher) -> Matcher:
    def _match(text: str) -> bool:
        return not any(matcher(text) for matcher in matchers)

    return _match


def match_rules(rules: Sequence[Rule], text: str) -> list[str]:
    """Return the tags of every rule matching ``text``, in table order."""

    return [rule.tag for rule in rules if rule.matches(text)]


def first_match(rules: Iterable[Rule], text: str) -> str | None:
    """Return the tag of the first rule matching ``text``."""

    for rule in rules:
        if rule.matches(text):
            return rule.tag
    return None
