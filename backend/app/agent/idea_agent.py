from app.agent.artifacts import BusinessContext, IdeaDraft
from app.agent.base import BaseAgent
from app.agent.parsing import parse_ideas_response
from app.agent.prompts.ideas import build_idea_generation_prompt
from app.core.errors import MalformedResponseError


class IdeaGenerationAgent(BaseAgent[BusinessContext, list[IdeaDraft]]):
    """
    Agent responsible for turning a business description into a batch of
    lead magnet ideas, in the order the model returned them.
    """

    prompt_name = "idea_generation"

    async def run(self, input_data: BusinessContext) -> list[IdeaDraft]:
        raw_text = await self.llm.complete(
            build_idea_generation_prompt(input_data),
            prompt_name=self.prompt_name,
        )
        ideas = self.parse(parse_ideas_response, raw_text)

        # An empty batch would leave a shareable link with nothing behind it.
        if not ideas:
            raise MalformedResponseError("Idea generation returned no usable ideas")
        return ideas
