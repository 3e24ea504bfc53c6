from functools import partial

from app.agent.artifacts import BusinessProfileSuggestion
from app.agent.base import BaseAgent
from app.agent.parsing import parse_autofill_response
from app.agent.prompts.autofill import build_autofill_prompt
from app.validators import normalize_business_url


class BusinessProfileAgent(BaseAgent[str, BusinessProfileSuggestion]):
    """Agent that reads a business homepage (via web search) and drafts the profile form."""

    prompt_name = "business_profile_autofill"

    async def run(self, input_data: str) -> BusinessProfileSuggestion:
        website = normalize_business_url(input_data)
        raw_text = await self.llm.complete(
            build_autofill_prompt(website),
            prompt_name=self.prompt_name,
            response_format="text",
            web_search=True,
        )
        return self.parse(partial(parse_autofill_response, website=website), raw_text)
