"""
Session Controller - Owns the lifecycle of the single check-in session.

    awaiting_mood -> active -> summarizing -> persisting -> terminated -> (reset) awaiting_mood

At most one gateway call is outstanding at a time. While one is, every
public operation is rejected rather than queued. Gateway failures never
escape: the assistant degrades to fixed utterances and persistence
failures become part of the termination result.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from ..models import (
    MoodOption, MoodRecord, PersistenceOutcome, Session, SessionStatus,
    SessionView, TerminationResult, Turn, TurnRole,
)
from ..services.assistant_gateway import AssistantGateway, SUMMARY_REQUEST, opening_message
from ..services.persistence_gateway import PersistenceGateway
from ..storage.credential_store import CredentialStore
from .errors import AssistantUnavailable, PersistenceFailed, PersistenceUnconfigured
from .logging_config import SessionLoggerAdapter

logger = logging.getLogger(__name__)


FALLBACK_GREETING = "I'm here to help you reflect on your mood. How are you feeling right now?"
APOLOGY = "I apologize, but I'm having trouble responding right now. Could you try again?"
CLOSING_FALLBACK = "Thank you for taking a moment to check in today. Be kind to yourself tonight."
SAVE_FAILED = "I couldn't save today's check-in to Notion ({reason}). Your reflection is still shown above."


def _local_now() -> datetime:
    return datetime.now().astimezone()


def concatenate_transcript(transcript) -> str:
    """Plain-text rendering of the conversation, used when no summary exists."""
    lines = []
    for turn in transcript:
        speaker = "Me" if turn.role == TurnRole.USER else "Assistant"
        lines.append(f"{speaker}: {turn.content}")
    return "\n".join(lines)


class SessionController:
    """Coordinates mood selection, conversation and persistence for one session."""

    def __init__(
        self,
        assistant: AssistantGateway,
        persistence: PersistenceGateway,
        credentials: CredentialStore,
        reset_delay: float = 3.0,
        clock: Callable[[], datetime] = _local_now,
    ):
        """
        Args:
            assistant: Gateway to the language model
            persistence: Gateway to the Notion workspace
            credentials: Read-only use; the controller never changes credentials
            reset_delay: Seconds the termination result stays up before reset
            clock: Source of session timestamps
        """
        self.assistant = assistant
        self.persistence = persistence
        self.credentials = credentials
        self.reset_delay = reset_delay
        self.clock = clock

        self.session = Session()
        self.is_loading = False
        self.is_saving = False
        self.last_result: Optional[TerminationResult] = None
        self._in_flight = False
        self._reset_task: Optional[asyncio.Task] = None

    @property
    def busy(self) -> bool:
        return self._in_flight

    @property
    def status(self) -> SessionStatus:
        return self.session.status

    @property
    def transcript(self) -> list[Turn]:
        return self.session.transcript

    @property
    def _log(self) -> SessionLoggerAdapter:
        mood = self.session.selected_mood
        return SessionLoggerAdapter(logger, {
            "session_id": self.session.session_id,
            "mood": mood.id if mood else None,
        })

    def _transition(self, status: SessionStatus) -> None:
        self._log.info(f"Session {self.session.status.value} -> {status.value}")
        self.session.status = status

    def _append(self, turn: Turn) -> None:
        self.session.transcript.append(turn)

    def view(self) -> SessionView:
        return SessionView(
            session_id=self.session.session_id,
            status=self.session.status,
            mood=self.session.selected_mood,
            transcript=list(self.session.transcript),
            started_at=self.session.started_at,
            is_loading=self.is_loading,
            is_saving=self.is_saving,
            last_result=self.last_result,
        )

    async def select_mood(self, mood: Optional[MoodOption]) -> bool:
        """
        Start a session for the chosen mood and fetch the assistant's opening turn.

        Returns:
            False when there is no mood, a call is in flight, or a session is
            already under way; True once the opening turn is in the transcript.
        """
        if mood is None or self._in_flight or self.session.status != SessionStatus.AWAITING_MOOD:
            return False

        self._in_flight = True
        self.last_result = None
        self.session = Session(selected_mood=mood, started_at=self.clock())
        self._transition(SessionStatus.ACTIVE)

        self.is_loading = True
        try:
            reply = await self.assistant.complete(
                [], opening_message(mood.label, mood.emoji), is_opening=True
            )
        except AssistantUnavailable as e:
            self._log.warning(f"Opening reply unavailable, using fallback greeting: {e}")
            reply = FALLBACK_GREETING
        finally:
            self.is_loading = False
            self._in_flight = False

        self._append(Turn.assistant(reply))
        return True

    async def send_message(self, text: str) -> bool:
        """
        Add a user turn and the assistant's answer to it.

        The user turn is appended before the assistant is called. If the call
        fails, a fixed apology is appended instead and the session stays usable.

        Returns:
            False (and nothing changes) for blank text, while a call is in
            flight, or outside the active state.
        """
        content = (text or "").strip()
        if not content or self._in_flight or self.session.status != SessionStatus.ACTIVE:
            return False

        self._in_flight = True
        history = list(self.session.transcript)
        self._append(Turn.user(content))

        self.is_loading = True
        try:
            reply = await self.assistant.complete(history, content)
        except AssistantUnavailable as e:
            self._log.warning(f"Reply unavailable, apologising instead: {e}")
            reply = APOLOGY
        finally:
            self.is_loading = False
            self._in_flight = False

        self._append(Turn.assistant(reply))
        return True

    async def end_session(self) -> Optional[TerminationResult]:
        """
        Summarize, persist once, and terminate the active session.

        Returns:
            The termination result, or None if the call was rejected because
            another call is in flight or the session is not active.
        """
        if self._in_flight or self.session.status != SessionStatus.ACTIVE:
            return None

        self._in_flight = True
        try:
            summary = await self._summarize()
            outcome, page_id, error, record = await self._persist(summary)

            self._transition(SessionStatus.TERMINATED)
            result = TerminationResult(
                session_id=self.session.session_id,
                outcome=outcome,
                record=record,
                page_id=page_id,
                summary=summary,
                error=error,
                transcript=list(self.session.transcript),
                terminated_at=self.clock(),
            )
            self.last_result = result
        finally:
            self.is_loading = False
            self.is_saving = False
            self._in_flight = False

        self._reset_task = asyncio.create_task(self._reset_after_delay(self.session.session_id))
        return result

    async def _summarize(self) -> Optional[str]:
        self._transition(SessionStatus.SUMMARIZING)
        self.is_loading = True
        try:
            summary = await self.assistant.complete(list(self.session.transcript), SUMMARY_REQUEST)
        except AssistantUnavailable as e:
            self._log.warning(f"Summary unavailable, the transcript becomes the note: {e}")
            summary = None
        finally:
            self.is_loading = False
        return summary

    async def _persist(self, summary: Optional[str]):
        """Build the record and write it at most once. Returns (outcome, page_id, error, record)."""
        mood = self.session.selected_mood
        record = MoodRecord(
            mood=mood.label,
            emoji=mood.emoji,
            date=self.session.started_at.date(),
            reflection_note=summary or concatenate_transcript(self.session.transcript) or None,
        )
        self._append(Turn.assistant(summary or CLOSING_FALLBACK))

        self._transition(SessionStatus.PERSISTING)
        if not await self.credentials.configured():
            self._log.info("Notion not configured, skipping save")
            return PersistenceOutcome.UNCONFIGURED, None, None, record

        self.is_saving = True
        try:
            page_id = await self.persistence.create_record(record, await self.credentials.get())
        except PersistenceUnconfigured:
            return PersistenceOutcome.UNCONFIGURED, None, None, record
        except PersistenceFailed as e:
            self._log.error(f"Saving check-in failed ({e.kind}): {e}")
            self._append(Turn.assistant(SAVE_FAILED.format(reason=e)))
            return PersistenceOutcome.FAILED, None, str(e), record
        except Exception as e:
            self._log.error(f"Saving check-in failed unexpectedly: {e!r}", exc_info=True)
            self._append(Turn.assistant(SAVE_FAILED.format(reason="unexpected error")))
            return PersistenceOutcome.FAILED, None, f"Unexpected error: {e}", record
        finally:
            self.is_saving = False

        return PersistenceOutcome.SAVED, page_id, None, record

    async def _reset_after_delay(self, session_id: str) -> None:
        await asyncio.sleep(self.reset_delay)
        if self.session.session_id == session_id and self.session.status == SessionStatus.TERMINATED:
            self._log.info("Session reset")
            self.session = Session()

    def reset(self) -> bool:
        """
        Discard the current session right away.

        Returns:
            False while a gateway call is in flight.
        """
        if self._in_flight:
            return False
        if self._reset_task is not None and not self._reset_task.done():
            self._reset_task.cancel()
        self._reset_task = None
        if self.session.status != SessionStatus.AWAITING_MOOD:
            self._log.info(f"Session reset from {self.session.status.value}")
        self.session = Session()
        return True

    async def wait_for_reset(self) -> None:
        """Wait until a pending post-termination reset has happened."""
        task = self._reset_task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise
