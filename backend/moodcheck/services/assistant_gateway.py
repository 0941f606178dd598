"""
Assistant Gateway - Stateless bridge to the chat-completion provider.

Every call resends the whole transcript; the gateway keeps no memory of
the conversation between calls.
"""

import logging
from typing import Optional, Sequence

from ..core.errors import AssistantUnavailable
from ..llm.base import LLMProvider, LLMMessage
from ..models import Turn

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """Reply as a cognitive behavioural therapist. The person you are talking to is working on self-esteem and self-acceptance.
Their goal for the year: reduce daily self-criticism and answer each critical thought with at least three kind statements, practising self-compassion through meditation and a progress journal.
With that in mind, they are reviewing how they feel at the end of the day. No reply may exceed 200 characters. Ask one question at a time to explore their mood and support them toward their goal."""

OPENING_FRAMING = "\nThis is the first message. Today's mood is: {message}."

SUMMARY_REQUEST = (
    "We are ending today's check-in. Write a short, kind closing reflection that "
    "summarizes how I felt and what we talked about, in under 200 characters."
)


def opening_message(label: str, emoji: str) -> str:
    """Synthetic first message sent when a mood is selected."""
    return f"Initial mood: {emoji} {label}"


class AssistantGateway:
    """Turns a transcript into the next assistant utterance."""

    def __init__(self, provider: Optional[LLMProvider],
                 temperature: float = 0.7, max_tokens: int = 150):
        """
        Args:
            provider: Configured LLM provider, or None when no key is set
            temperature: Sampling temperature for every call
            max_tokens: Response ceiling; keeps replies short upstream
        """
        self.provider = provider
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def configured(self) -> bool:
        return self.provider is not None

    def build_messages(self, transcript: Sequence[Turn], latest_user_message: str,
                       is_opening: bool = False) -> list[LLMMessage]:
        """System prompt, then prior turns in order, then the latest user message."""
        system_prompt = SYSTEM_PROMPT
        if is_opening:
            system_prompt += OPENING_FRAMING.format(message=latest_user_message)

        messages = [LLMMessage.text("system", system_prompt)]
        messages.extend(LLMMessage.text(turn.role.value, turn.content) for turn in transcript)
        messages.append(LLMMessage.text("user", latest_user_message))
        return messages

    async def complete(self, transcript: Sequence[Turn], latest_user_message: str,
                       is_opening: bool = False) -> str:
        """
        Ask the provider for the next assistant reply.

        Args:
            transcript: Turns exchanged so far, not including latest_user_message
            latest_user_message: What the assistant should respond to
            is_opening: Whether this opens the session

        Returns:
            The reply text

        Raises:
            AssistantUnavailable: No provider, provider error, or empty reply
        """
        if self.provider is None:
            raise AssistantUnavailable("LLM provider not configured")

        messages = self.build_messages(transcript, latest_user_message, is_opening)

        try:
            response = await self.provider.chat_completion(
                messages, temperature=self.temperature, max_tokens=self.max_tokens
            )
        except Exception as e:
            raise AssistantUnavailable(f"Completion failed: {e}") from e

        content = (response.content or "").strip()
        if not content:
            raise AssistantUnavailable("Completion returned no content")

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Assistant replied: {len(content)} chars, "
                f"{len(transcript)} prior turns, opening={is_opening}"
            )
        return content
