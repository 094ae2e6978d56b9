"""Mock-editor classification rules.

A rule is a predicate over ``(editor_id, document)`` paired with the reason
reported when it matches. Rules are evaluated in order and the first match
wins; any match marks the editor for deletion. These are heuristics: false
positives and negatives are expected.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

EditorPredicate = Callable[[str, Mapping[str, Any]], bool]

# Web-generated placeholders, sample rows, and people scraped from credits who
# are not editors (actors, characters, distributors).
MOCK_EDITOR_NAMES: frozenset[str] = frozenset({
    "John Smith",
    "Jane Doe",
    "Sarah Martinez",
    "Michael Chen",
    "Emily Rodriguez",
    "David Kim",
    "Warner Home Video",
    "Lucasfilm Press",
    "Din Djarin",
    "Claire Foy",
    "Alicia Vikander",
    "Eva Green",
    "Matthew Perry",
    "Jennifer Aniston",
    "Courteney Cox",
    "Lisa Kudrow",
    "Matt LeBlanc",
    "David Schwimmer",
    "Brian Baumgartner",
    "Kelsey Grammer",
    "Julie Kavner",
    "Hank Azaria",
    "Nancy Cartwright",
    "Matt Groening",
    "Dan Castellaneta",
    "Travis Fimmel",
    "Mickey Rourke",
    "Matthew Modine",
    "Not specified",
    "Sample Editor",
    "Test Editor",
    "Example Editor",
})

SYNTHETIC_ID_PREFIXES: tuple[str, ...] = ("web-", "web-credit-")


@dataclass(frozen=True)
class CleanupRule:
    name: str
    reason: str
    predicate: EditorPredicate

    def matches(self, editor_id: str, doc: Mapping[str, Any]) -> bool:
        return self.predicate(editor_id, doc)


def _section(doc: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = doc.get(key)
    return value if isinstance(value, Mapping) else {}


def is_mock_name(editor_id: str, doc: Mapping[str, Any]) -> bool:  # noqa: ARG001
    return doc.get("name") in MOCK_EDITOR_NAMES


def has_synthetic_id(editor_id: str, doc: Mapping[str, Any]) -> bool:  # noqa: ARG001
    return editor_id.startswith(SYNTHETIC_ID_PREFIXES)


def has_unknown_location(editor_id: str, doc: Mapping[str, Any]) -> bool:  # noqa: ARG001
    location = _section(doc, "location")
    return location.get("city") == "Unknown" and location.get("state") == "Unknown"


def has_all_unknown_data(editor_id: str, doc: Mapping[str, Any]) -> bool:  # noqa: ARG001
    professional = _section(doc, "professional")
    return (
        professional.get("unionStatus") == "unknown"
        and professional.get("availability") == "unknown"
        and _section(doc, "location").get("city") == "Unknown"
    )


DEFAULT_RULES: tuple[CleanupRule, ...] = (
    CleanupRule("mock-name", "Known mock/non-editor", is_mock_name),
    CleanupRule("synthetic-id", "Web-generated mock ID", has_synthetic_id),
    CleanupRule("unknown-location", "Unknown location (web-scraped)", has_unknown_location),
    CleanupRule("all-unknown", "All unknown data", has_all_unknown_data),
)


def classify(
    editor_id: str,
    doc: Mapping[str, Any],
    rules: Sequence[CleanupRule] = DEFAULT_RULES,
) -> CleanupRule | None:
    """Return the first rule matching the editor, or ``None`` for a real record."""
    for rule in rules:
        if rule.matches(editor_id, doc):
            return rule
    return None
