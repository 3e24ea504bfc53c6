import logging
import secrets
import string
from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.agent.artifacts import IdeaDraft
from app.core.config import settings
from app.core.errors import (
    DuplicateIdentifierError,
    InvalidReferenceError,
    NotFoundError,
)
from app.models import (
    HelpRequest,
    HelpRequestCreate,
    Idea,
    IdeaFeedback,
    IdeaFeedbackCreate,
    IdeaIteration,
    MagnetRequest,
    MagnetRequestCreate,
)

logger = logging.getLogger(__name__)

PUBLIC_ID_ALPHABET = string.ascii_letters + string.digits + "_-"


def generate_public_id(length: int | None = None) -> str:
    """Random URL-safe identifier; carries no information about the row it names."""
    size = length or settings.PUBLIC_ID_LENGTH
    return "".join(secrets.choice(PUBLIC_ID_ALPHABET) for _ in range(size))


# Magnet requests, ideas and their initial iterations

def create_magnet_request(*, session: Session, request_in: MagnetRequestCreate) -> MagnetRequest:
    """
    Insert a request with a fresh public identifier. Flushes but does not commit,
    so it can share a transaction with the request's ideas.
    """
    db_request = MagnetRequest.model_validate(
        request_in, update={"public_id": generate_public_id()}
    )
    session.add(db_request)
    try:
        session.flush()
    except IntegrityError as e:
        session.rollback()
        raise DuplicateIdentifierError() from e
    return db_request


def create_ideas(
    *, session: Session, magnet_request: MagnetRequest, ideas: Sequence[IdeaDraft]
) -> list[Idea]:
    """Insert a request's ideas with positions 1..N in input order. Flushes, no commit."""
    db_ideas = [
        Idea(
            magnet_request_id=magnet_request.id,
            result_idea_id=position,
            name=idea.name,
            summary=idea.summary,
            detailed_description=idea.detailed_description,
            why_this=idea.why_this,
            complexity_level=idea.complexity_level,
        )
        for position, idea in enumerate(ideas, start=1)
    ]
    session.add_all(db_ideas)
    session.flush()
    return db_ideas


def initial_iteration(idea: Idea) -> IdeaIteration:
    return IdeaIteration(
        idea_id=idea.id,
        version=0,
        name=idea.name,
        summary=idea.summary,
        detailed_description=idea.detailed_description,
        why_this=idea.why_this,
        complexity_level=idea.complexity_level,
    )


def create_idea_iterations(
    *, session: Session, iterations: Sequence[IdeaIteration]
) -> list[IdeaIteration]:
    """Insert a batch of iteration rows. Flushes, no commit."""
    db_iterations = list(iterations)
    session.add_all(db_iterations)
    session.flush()
    return db_iterations


def create_result_set(
    *,
    session: Session,
    request_in: MagnetRequestCreate,
    ideas: Sequence[IdeaDraft],
    max_attempts: int | None = None,
) -> tuple[MagnetRequest, list[Idea]]:
    """
    Persist a request, its ideas and their version-0 iterations in one
    transaction. A public identifier collision restarts the transaction
    with a new identifier.
    """
    attempts = max_attempts or settings.PUBLIC_ID_MAX_ATTEMPTS
    for attempt in range(1, attempts + 1):
        try:
            db_request = create_magnet_request(session=session, request_in=request_in)
        except DuplicateIdentifierError:
            if attempt == attempts:
                logger.error("Public identifier collided %s times in a row", attempts)
                raise
            logger.warning("Public identifier collision (attempt %s/%s), retrying", attempt, attempts)
            continue

        try:
            db_ideas = create_ideas(session=session, magnet_request=db_request, ideas=ideas)
            create_idea_iterations(
                session=session,
                iterations=[initial_iteration(idea) for idea in db_ideas],
            )
            session.commit()
        except Exception:
            session.rollback()
            raise

        session.refresh(db_request)
        return db_request, db_ideas

    raise RuntimeError("Result set creation failed without a captured error")


# Lookups

def get_magnet_request_by_public_id(*, session: Session, public_id: str) -> MagnetRequest:
    statement = select(MagnetRequest).where(MagnetRequest.public_id == public_id)
    db_request = session.exec(statement).first()
    if not db_request:
        raise NotFoundError("Magnet request not found")
    return db_request


def get_idea_by_id(*, session: Session, idea_id: int) -> Idea:
    idea = session.get(Idea, idea_id)
    if not idea:
        raise NotFoundError("Idea not found")
    return idea


def get_idea_by_result_id(*, session: Session, public_id: str, result_idea_id: int) -> Idea:
    # A missing request and a missing position are reported the same way.
    statement = (
        select(Idea)
        .join(MagnetRequest)
        .where(MagnetRequest.public_id == public_id)
        .where(Idea.result_idea_id == result_idea_id)
    )
    idea = session.exec(statement).first()
    if not idea:
        raise NotFoundError("Idea not found")
    return idea


def get_idea_iteration_by_id(*, session: Session, iteration_id: int) -> IdeaIteration:
    iteration = session.get(IdeaIteration, iteration_id)
    if not iteration:
        raise NotFoundError("Idea iteration not found")
    return iteration


def get_idea_iteration_by_version(*, session: Session, idea_id: int, version: int) -> IdeaIteration:
    statement = select(IdeaIteration).where(
        IdeaIteration.idea_id == idea_id, IdeaIteration.version == version
    )
    iteration = session.exec(statement).first()
    if not iteration:
        raise NotFoundError("Idea iteration not found")
    return iteration


def get_latest_version(*, session: Session, idea_id: int) -> int | None:
    statement = select(func.max(IdeaIteration.version)).where(IdeaIteration.idea_id == idea_id)
    return session.exec(statement).one()


def get_latest_iteration(*, session: Session, idea_id: int) -> IdeaIteration:
    statement = (
        select(IdeaIteration)
        .where(IdeaIteration.idea_id == idea_id)
        .order_by(IdeaIteration.version.desc())
    )
    iteration = session.exec(statement).first()
    if not iteration:
        raise NotFoundError("Idea iteration not found")
    return iteration


def get_idea_iterations(*, session: Session, idea_id: int) -> list[IdeaIteration]:
    """Iterations of an idea, newest first."""
    statement = (
        select(IdeaIteration)
        .where(IdeaIteration.idea_id == idea_id)
        .order_by(IdeaIteration.version.desc())
    )
    return list(session.exec(statement).all())


def get_iteration_metadata(*, session: Session, idea_id: int) -> list[dict]:
    return [
        {
            "id": iteration.id,
            "version": iteration.version,
            "feedback_provided": iteration.feedback_provided,
            "has_magnet_spec": bool(iteration.magnet_spec),
            "has_creation_prompt": bool(iteration.creation_prompt),
            "created_at": iteration.created_at,
        }
        for iteration in get_idea_iterations(session=session, idea_id=idea_id)
    ]


# Iteration lifecycle

def append_idea_iteration(
    *,
    session: Session,
    idea_id: int,
    content: IdeaDraft,
    feedback_provided: str | None,
    max_attempts: int | None = None,
) -> IdeaIteration:
    """
    Add the next version of an idea.

    The idea row is locked for the duration of the transaction so concurrent
    appends queue up behind each other. Databases without row locks rely on the
    (idea_id, version) unique constraint instead: a losing insert is rolled back
    and retried with a fresh version number.
    """
    attempts = max_attempts or settings.ITERATION_APPEND_MAX_ATTEMPTS
    for attempt in range(1, attempts + 1):
        idea = session.exec(select(Idea).where(Idea.id == idea_id).with_for_update()).first()
        if not idea:
            session.rollback()
            raise NotFoundError("Idea not found")

        latest = get_latest_version(session=session, idea_id=idea_id)
        db_iteration = IdeaIteration(
            idea_id=idea_id,
            version=0 if latest is None else latest + 1,
            name=content.name,
            summary=content.summary,
            detailed_description=content.detailed_description,
            why_this=content.why_this,
            complexity_level=content.complexity_level,
            feedback_provided=feedback_provided,
        )
        session.add(db_iteration)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            if attempt == attempts:
                raise
            logger.warning(
                "Version race on idea %s (attempt %s/%s), retrying", idea_id, attempt, attempts
            )
            continue

        session.refresh(db_iteration)
        return db_iteration

    raise RuntimeError("Iteration append failed without a captured error")


def update_iteration_artifacts(
    *,
    session: Session,
    iteration_id: int,
    magnet_spec: str | None = None,
    creation_prompt: str | None = None,
) -> IdeaIteration:
    """Overwrite the spec and/or build prompt of an iteration. Not versioned."""
    iteration = get_idea_iteration_by_id(session=session, iteration_id=iteration_id)
    if magnet_spec is not None:
        iteration.magnet_spec = magnet_spec
    if creation_prompt is not None:
        iteration.creation_prompt = creation_prompt
    session.add(iteration)
    session.commit()
    session.refresh(iteration)
    return iteration


# Feedback and help requests

def create_idea_feedback(*, session: Session, feedback_in: IdeaFeedbackCreate) -> IdeaFeedback:
    db_feedback = IdeaFeedback.model_validate(feedback_in.model_dump())
    session.add(db_feedback)
    session.commit()
    session.refresh(db_feedback)
    return db_feedback


def check_help_request_reference(help_in: HelpRequestCreate) -> None:
    if (help_in.idea_id is None) == (help_in.idea_iteration_id is None):
        raise InvalidReferenceError()


def create_help_request(*, session: Session, help_in: HelpRequestCreate) -> HelpRequest:
    check_help_request_reference(help_in)
    db_help_request = HelpRequest(
        idea_id=help_in.idea_id,
        idea_iteration_id=help_in.idea_iteration_id,
        email=str(help_in.email),
    )
    session.add(db_help_request)
    session.commit()
    session.refresh(db_help_request)
    return db_help_request
