import logging
from typing import Any

from fastapi import APIRouter

from app import crud
from app.api.deps import MailerDep, SessionDep
from app.emails import generate_help_request_email
from app.models import (
    FeedbackResponse,
    HelpRequestCreate,
    HelpRequestPublic,
    HelpRequestResponse,
    IdeaFeedbackCreate,
    IdeaFeedbackPublic,
)

router = APIRouter(tags=["feedback"])
logger = logging.getLogger(__name__)


@router.post("/feedback", response_model=FeedbackResponse)
def create_feedback(payload: IdeaFeedbackCreate, session: SessionDep) -> Any:
    crud.get_idea_iteration_by_id(session=session, iteration_id=payload.idea_iteration_id)
    feedback = crud.create_idea_feedback(session=session, feedback_in=payload)
    return FeedbackResponse(feedback=IdeaFeedbackPublic.model_validate(feedback))


@router.post("/help-requests", response_model=HelpRequestResponse)
async def create_help_request(
    payload: HelpRequestCreate, session: SessionDep, mailer: MailerDep
) -> Any:
    """
    Record a request for build help and email the requester. The email is
    best-effort: once the row is stored the request succeeds.
    """
    crud.check_help_request_reference(payload)
    iteration = None
    if payload.idea_iteration_id is not None:
        iteration = crud.get_idea_iteration_by_id(
            session=session, iteration_id=payload.idea_iteration_id
        )
        idea = iteration.idea
    else:
        idea = crud.get_idea_by_id(session=session, idea_id=payload.idea_id)

    help_request = crud.create_help_request(session=session, help_in=payload)
    response = HelpRequestResponse(help_request=HelpRequestPublic.model_validate(help_request))

    try:
        email = generate_help_request_email(
            magnet_request=idea.magnet_request, idea=idea, iteration=iteration
        )
        await mailer.send_email(email_to=help_request.email, email=email)
    except Exception:
        logger.exception("Failed to send email for help request %s", help_request.id)

    return response
