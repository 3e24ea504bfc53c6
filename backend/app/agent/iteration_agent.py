from pydantic import BaseModel

from app.agent.artifacts import BusinessContext, IdeaDraft
from app.agent.base import BaseAgent
from app.agent.parsing import parse_iteration_response
from app.agent.prompts.iteration import build_iteration_prompt


class IterationInput(BaseModel):
    idea: IdeaDraft
    business: BusinessContext
    user_feedback: str


class IterationAgent(BaseAgent[IterationInput, IdeaDraft]):
    """
    Agent that revises an idea from free-form user feedback. All five content
    fields must come back; a partial revision fails the call.
    """

    prompt_name = "idea_iteration"

    async def run(self, input_data: IterationInput) -> IdeaDraft:
        raw_text = await self.llm.complete(
            build_iteration_prompt(input_data.idea, input_data.business, input_data.user_feedback),
            prompt_name=self.prompt_name,
        )
        return self.parse(parse_iteration_response, raw_text)
