from pydantic import BaseModel

from app.agent.artifacts import BusinessContext, IdeaDraft, MagnetSpec
from app.agent.base import BaseAgent
from app.agent.parsing import parse_spec_response
from app.agent.prompts.spec import build_spec_prompt


class SpecInput(BaseModel):
    idea: IdeaDraft
    business: BusinessContext


class SpecAgent(BaseAgent[SpecInput, MagnetSpec]):
    """Agent that writes the technical spec and one-shot build prompt for an idea."""

    prompt_name = "magnet_spec"

    async def run(self, input_data: SpecInput) -> MagnetSpec:
        raw_text = await self.llm.complete(
            build_spec_prompt(input_data.idea, input_data.business),
            prompt_name=self.prompt_name,
        )
        return self.parse(parse_spec_response, raw_text)
