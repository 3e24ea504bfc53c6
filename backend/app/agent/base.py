import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, TypeVar

from app.agent.llm_client import LLMClient
from app.core.errors import MalformedResponseError

logger = logging.getLogger(__name__)

InType = TypeVar("InType")
OutType = TypeVar("OutType")
Parsed = TypeVar("Parsed")


class BaseAgent(ABC, Generic[InType, OutType]):
    """Builds one prompt, sends it through the shared LLM client and parses the answer."""

    prompt_name: str = "completion"

    def __init__(self, llm: LLMClient):
        self.llm = llm

    @abstractmethod
    async def run(self, input_data: InType) -> OutType:
        """Run the agent on the given input to produce the output artifact."""
        pass

    def parse(self, parser: Callable[[str], Parsed], raw_text: str) -> Parsed:
        try:
            return parser(raw_text)
        except MalformedResponseError as e:
            logger.error("Unusable %s response from %s: %s", self.prompt_name, self.llm.model_name, e)
            raise
