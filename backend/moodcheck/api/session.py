"""
Session API endpoints - Drive the single check-in session.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.session_controller import SessionController
from ..models import (
    MessageRequest, MoodSelection, SessionStatus, SessionView,
    TerminationResult, get_mood,
)
from ..utils.dependencies import get_controller


router = APIRouter(prefix="/session", tags=["session"])


def _conflict(controller: SessionController, action: str) -> HTTPException:
    """409 explaining why the controller turned the request down."""
    if controller.busy:
        reason = "another request for this session is still in progress"
    else:
        reason = f"session is {controller.status.value}"
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Cannot {action}: {reason}"
    )


@router.get("", response_model=SessionView)
async def get_session(controller: SessionController = Depends(get_controller)):
    """Current session state."""
    return controller.view()


@router.post("/mood", response_model=SessionView)
async def select_mood(
    selection: MoodSelection,
    controller: SessionController = Depends(get_controller)
):
    """
    Start a check-in with the chosen mood.

    Returns once the assistant's opening turn is in the transcript.
    """
    mood = get_mood(selection.mood_id)
    if mood is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown mood: {selection.mood_id}"
        )

    if not await controller.select_mood(mood):
        raise _conflict(controller, "select a mood")

    return controller.view()


@router.post("/message", response_model=SessionView)
async def send_message(
    message: MessageRequest,
    controller: SessionController = Depends(get_controller)
):
    """Send a user message and get the assistant's reply appended."""
    if not message.content.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Message is required"
        )

    if not await controller.send_message(message.content):
        raise _conflict(controller, "send a message")

    return controller.view()


@router.post("/end", response_model=TerminationResult)
async def end_session(controller: SessionController = Depends(get_controller)):
    """
    End the check-in: summarize, save to Notion when configured, terminate.

    The session resets by itself after the configured display delay.
    """
    result = await controller.end_session()
    if result is None:
        raise _conflict(controller, "end the session")
    return result


@router.post("/reset", response_model=SessionView)
async def reset_session(controller: SessionController = Depends(get_controller)):
    """
    Skip the display delay after a check-in has terminated.

    An active check-in is never discarded here; it has to be ended first.
    """
    if controller.status == SessionStatus.AWAITING_MOOD:
        return controller.view()
    if controller.status != SessionStatus.TERMINATED or not controller.reset():
        raise _conflict(controller, "reset")
    return controller.view()
