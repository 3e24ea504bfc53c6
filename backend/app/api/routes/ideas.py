import logging
from typing import Any

from fastapi import APIRouter
from sqlmodel import Session

from app import crud
from app.agent.artifacts import BusinessContext, IdeaDraft, MagnetSpec
from app.agent.idea_agent import IdeaGenerationAgent
from app.agent.iteration_agent import IterationAgent, IterationInput
from app.agent.llm_client import LLMClient
from app.agent.spec_agent import SpecAgent, SpecInput
from app.api.deps import LLMDep, SessionDep
from app.models import (
    GeneratedIdea,
    GenerateIdeasRequest,
    GenerateIdeasResponse,
    GenerateSpecRequest,
    IdeaIterationWithIdea,
    IdeaWithMetadata,
    IdeaWithRequest,
    IterateIdeaRequest,
    IterateIdeaResponse,
    IterationMetadata,
    IterationResponse,
    MagnetRequestCreate,
    MagnetRequestWithIdeas,
)

router = APIRouter(tags=["ideas"])
logger = logging.getLogger(__name__)


async def _generate_result_set(
    *, session: Session, llm: LLMClient, payload: GenerateIdeasRequest
) -> GenerateIdeasResponse:
    ideas = await IdeaGenerationAgent(llm).run(payload)
    magnet_request, db_ideas = crud.create_result_set(
        session=session,
        request_in=MagnetRequestCreate(
            prod_description=payload.prod_description,
            target_audience=payload.target_audience,
            location=payload.location,
            business_url=payload.business_url,
        ),
        ideas=ideas,
    )
    logger.info(
        "Created magnet request %s with %s ideas", magnet_request.public_id, len(db_ideas)
    )
    return GenerateIdeasResponse(
        ideas=[GeneratedIdea.model_validate(idea) for idea in db_ideas],
        magnet_request_id=magnet_request.id,
        public_id=magnet_request.public_id,
    )


@router.post("/generate-ideas", response_model=GenerateIdeasResponse)
async def generate_ideas(
    payload: GenerateIdeasRequest, session: SessionDep, llm: LLMDep
) -> Any:
    return await _generate_result_set(session=session, llm=llm, payload=payload)


@router.post("/regenerate-ideas", response_model=GenerateIdeasResponse)
async def regenerate_ideas(
    payload: GenerateIdeasRequest, session: SessionDep, llm: LLMDep
) -> Any:
    """
    Generate a fresh result set for an edited business profile. Always creates
    a new request so links to earlier results keep working.
    """
    return await _generate_result_set(session=session, llm=llm, payload=payload)


@router.get("/results/{public_id}", response_model=MagnetRequestWithIdeas)
def read_results(public_id: str, session: SessionDep) -> Any:
    magnet_request = crud.get_magnet_request_by_public_id(session=session, public_id=public_id)
    return MagnetRequestWithIdeas.model_validate(magnet_request)


@router.get("/results/{public_id}/ideas/{result_idea_id}", response_model=IdeaWithRequest)
def read_result_idea(public_id: str, result_idea_id: int, session: SessionDep) -> Any:
    idea = crud.get_idea_by_result_id(
        session=session, public_id=public_id, result_idea_id=result_idea_id
    )
    return IdeaWithRequest.model_validate(idea)


@router.get(
    "/results/{public_id}/ideas/{result_idea_id}/with-metadata",
    response_model=IdeaWithMetadata,
)
def read_result_idea_with_metadata(
    public_id: str, result_idea_id: int, session: SessionDep
) -> Any:
    idea = crud.get_idea_by_result_id(
        session=session, public_id=public_id, result_idea_id=result_idea_id
    )
    metadata = crud.get_iteration_metadata(session=session, idea_id=idea.id)
    return IdeaWithMetadata(
        idea=IdeaWithRequest.model_validate(idea),
        iteration_metadata=[IterationMetadata.model_validate(item) for item in metadata],
    )


@router.get("/ideas/{idea_id}", response_model=IdeaWithRequest)
def read_idea(idea_id: int, session: SessionDep) -> Any:
    idea = crud.get_idea_by_id(session=session, idea_id=idea_id)
    return IdeaWithRequest.model_validate(idea)


@router.get("/ideas/{idea_id}/iteration/{version}", response_model=IterationResponse)
def read_idea_iteration(idea_id: int, version: int, session: SessionDep) -> Any:
    iteration = crud.get_idea_iteration_by_version(
        session=session, idea_id=idea_id, version=version
    )
    return IterationResponse(iteration=IdeaIterationWithIdea.model_validate(iteration))


@router.post("/generate-spec", response_model=MagnetSpec)
async def generate_spec(payload: GenerateSpecRequest, session: SessionDep, llm: LLMDep) -> Any:
    """
    Write the technical spec and build prompt for an idea. With an iterationId
    the result overwrites whatever that iteration stored before.
    """
    if payload.iteration_id is not None:
        # Fail before spending a completion on an iteration that does not exist.
        crud.get_idea_iteration_by_id(session=session, iteration_id=payload.iteration_id)

    spec = await SpecAgent(llm).run(SpecInput(idea=payload.idea, business=payload.business_data))

    if payload.iteration_id is not None:
        crud.update_iteration_artifacts(
            session=session,
            iteration_id=payload.iteration_id,
            magnet_spec=spec.magnet_spec,
            creation_prompt=spec.creation_prompt,
        )
        logger.info("Stored spec artifacts on iteration %s", payload.iteration_id)
    return spec


@router.post("/iterate-idea", response_model=IterateIdeaResponse)
async def iterate_idea(payload: IterateIdeaRequest, session: SessionDep, llm: LLMDep) -> Any:
    idea = crud.get_idea_by_id(session=session, idea_id=payload.idea_id)
    latest = crud.get_latest_iteration(session=session, idea_id=idea.id)

    # The client may be looking at a version the server has since moved past;
    # what the user saw is what they gave feedback on.
    base_content = payload.current_idea_content or IdeaDraft.model_validate(latest)
    business = BusinessContext.model_validate(idea.magnet_request)

    revision = await IterationAgent(llm).run(
        IterationInput(idea=base_content, business=business, user_feedback=payload.user_feedback)
    )
    iteration = crud.append_idea_iteration(
        session=session,
        idea_id=idea.id,
        content=revision,
        feedback_provided=payload.user_feedback,
    )
    logger.info("Idea %s now at version %s", iteration.idea_id, iteration.version)
    return IterateIdeaResponse(idea=IdeaIterationWithIdea.model_validate(iteration))
