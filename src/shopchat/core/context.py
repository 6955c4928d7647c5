"""Conversation context assembly.

Caller-supplied history is untrusted: ``coerce_history`` validates it at
the boundary and ``build_context`` bounds it, so the list sent to the
model never grows with the length of the conversation.
"""

import logging
from typing import Any, Sequence

from pydantic import ValidationError

from .models import ROLE_SYSTEM, Message

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 12


def coerce_history(raw: Any) -> list[Message] | None:
    """Turn an arbitrary JSON value into a list of messages.

    Anything that is not a list means "no history".  Entries without a
    known role or a string ``content`` are dropped rather than failing
    the request.
    """
    if not isinstance(raw, list):
        return None

    messages: list[Message] = []
    dropped = 0
    for entry in raw:
        if not isinstance(entry, dict) or not isinstance(entry.get("content"), str):
            dropped += 1
            continue
        try:
            messages.append(Message(role=entry.get("role"), content=entry["content"]))
        except ValidationError:
            dropped += 1

    if dropped:
        logger.debug("Dropped %d malformed history entries", dropped)
    return messages


def build_context(
    history: Sequence[Message] | None,
    system_prompt: Message,
    user_message: Message,
    tool_message: Message | None = None,
    max_history: int = DEFAULT_MAX_HISTORY,
) -> list[Message]:
    """Assemble ``[system, *recent_turns, tool_message?, user_message]``.

    The first system message found in *history* replaces *system_prompt*;
    any further system messages in history are discarded.  Only the last
    *max_history* non-system turns are kept, oldest first.
    """
    system = system_prompt
    turns: list[Message] = []
    seen_system = False
    for message in history or ():
        if message.role == ROLE_SYSTEM:
            if not seen_system:
                system = message
                seen_system = True
            continue
        turns.append(message)

    recent = turns[-max_history:] if max_history > 0 else []

    context = [system, *recent]
    if tool_message is not None:
        context.append(tool_message)
    context.append(user_message)
    return context
