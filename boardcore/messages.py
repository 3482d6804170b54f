"""User-facing message templates for validation verdicts.

Templates use ``str.format`` placeholders. Games register their own keys
under a ``<uid>.`` prefix with :func:`register_messages`.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

__all__ = ["MESSAGES", "format_message", "register_messages"]

MESSAGES: dict[str, str] = {
    "_general.DEFAULT_HANDLER": "The move could not be validated.",
    "_general.EMPTYSTRING": "Enter a move.",
    "_general.GENERIC": "The click at row {row}, col {col} on move '{move}' could not be processed: {emessage}",
    "_general.INVALIDCELL": "'{cell}' is not a valid cell.",
    "_general.NONEXISTENT": "There is no piece at {where}.",
    "_general.UNCONTROLLED": "You can only move your own pieces.",
    "_general.OCCUPIED": "The cell {where} is already occupied.",
    "_general.OBSTRUCTED": "The path from {from_cell} to {to} is obstructed at {obstruction}.",
    "_general.VALID_MOVE": "Valid move.",
    "_general.FAILSAFE": "'{move}' is not in the list of legal moves.",
    "_general.GAMEOVER": "The game is over; no further moves can be made.",
}


def register_messages(prefix: str, templates: dict[str, str]) -> None:
    """Add ``templates`` under ``prefix``; existing keys are overwritten."""
    for key, text in templates.items():
        MESSAGES[f"{prefix}.{key}"] = text


def format_message(key: str, **params: object) -> str:
    """Render the template ``key``; unknown keys render as the key itself."""
    template = MESSAGES.get(key)
    if template is None:
        logger.debug("No message template for %s", key)
        return key
    try:
        return template.format(**params)
    except (KeyError, IndexError):
        logger.debug("Missing parameters for message %s: %s", key, params)
        return template
