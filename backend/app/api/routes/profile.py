from typing import Any

from fastapi import APIRouter

from app.agent.artifacts import BusinessProfileSuggestion
from app.agent.profile_agent import BusinessProfileAgent
from app.api.deps import LLMDep
from app.models import AutofillRequest

router = APIRouter(tags=["profile"])


@router.post("/autofill-business-profile", response_model=BusinessProfileSuggestion)
async def autofill_business_profile(payload: AutofillRequest, llm: LLMDep) -> Any:
    """Draft the business description and audience from the company's homepage."""
    return await BusinessProfileAgent(llm).run(payload.business_url)
