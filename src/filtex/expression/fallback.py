"""Free-text fallback for expressions that do not match their grammar."""

from __future__ import annotations

from filtex.expression.ast import MatchesAdvanced, Node


ADVANCED_ID = 1


def to_advanced(text: str, previous: Node | None = None) -> MatchesAdvanced:
    """Wrap text as a MatchesAdvanced node.

    A previous MatchesAdvanced node keeps its text and id, so free text typed
    earlier survives re-parsing. Anything else yields the literal text with id 1.
    """
    if isinstance(previous, MatchesAdvanced):
        return MatchesAdvanced(previous.expression, id=previous.id)
    return MatchesAdvanced(text, id=ADVANCED_ID)
