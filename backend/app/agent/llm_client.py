import logging
from typing import Literal

import openai
from openai import AsyncOpenAI

from app.core.config import settings
from app.core.errors import UpstreamTimeoutError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

ResponseFormat = Literal["json_object", "text"]


class LLMClient:
    """
    Thin wrapper around the OpenAI Responses API.

    One call per completion: no retries, no streaming. Failures surface as
    UpstreamTimeoutError or UpstreamUnavailableError.
    """

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        web_search_model: str | None = None,
    ):
        self.model_name = model_name or settings.MODEL_DEFAULT
        self.web_search_model = web_search_model or settings.MODEL_WEB_SEARCH
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS

        resolved_api_key = api_key or settings.LLM_API_KEY or settings.OPENAI_API_KEY
        resolved_base_url = base_url or settings.LLM_BASE_URL

        self.client = AsyncOpenAI(
            base_url=resolved_base_url,
            api_key=resolved_api_key,
            max_retries=0,
            timeout=self.timeout,
        )

    def _response_kwargs(self, *, response_format: ResponseFormat, web_search: bool) -> dict:
        if web_search:
            # JSON mode is not available together with the search tool.
            return {"tools": [{"type": "web_search_preview"}]}
        if response_format == "json_object":
            return {"text": {"format": {"type": "json_object"}}}
        return {}

    async def complete(
        self,
        prompt: str,
        *,
        prompt_name: str,
        response_format: ResponseFormat = "json_object",
        web_search: bool = False,
        model: str | None = None,
    ) -> str:
        """
        Submit `prompt` and return the completion text.
        `prompt_name` identifies the prompt in logs; the prompt text itself is never logged.
        """
        model_to_use = model or (self.web_search_model if web_search else self.model_name)
        logger.info(
            "Issuing %s request to model %s (%s chars, web_search=%s)...",
            prompt_name,
            model_to_use,
            len(prompt),
            web_search,
        )
        try:
            response = await self.client.responses.create(
                model=model_to_use,
                input=prompt,
                timeout=self.timeout,
                **self._response_kwargs(response_format=response_format, web_search=web_search),
            )
        except openai.APITimeoutError as e:
            logger.error(
                "%s request to %s timed out after %ss", prompt_name, model_to_use, self.timeout
            )
            raise UpstreamTimeoutError(f"{prompt_name} timed out") from e
        except openai.OpenAIError as e:
            logger.error("%s request to %s failed: %s", prompt_name, model_to_use, e)
            raise UpstreamUnavailableError(f"{prompt_name} failed: {e}") from e

        text_response = getattr(response, "output_text", None) or ""
        logger.info(
            "Received %s response from %s (%s chars).",
            prompt_name,
            model_to_use,
            len(text_response),
        )
        return text_response
