# querychart/services/ai_client.py
"""Generation provider client returning schema-validated objects."""
import logging
import re
from typing import Optional, Protocol, TypeVar

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from querychart.config import Settings
from querychart.services.resilience import retry_async
from querychart.utils.exceptions import AIServiceError, ConfigurationError

logger = logging.getLogger("ai-client")

ModelT = TypeVar("ModelT", bound=BaseModel)

# Provider failures worth another attempt
TRANSIENT_ERRORS = (
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)


class GenerationProvider(Protocol):
    """Anything that turns instructions into an object of a given schema."""

    async def generate_object(
        self,
        system_prompt: str,
        user_prompt: str,
        response_model: type[ModelT]
    ) -> ModelT:
        ...


def extract_code_block(content: str, language: Optional[str] = None) -> str:
    """Extract the payload from LLM output that may contain reasoning text.

    Prefers fenced blocks tagged with ``language``, then generic fenced
    blocks, then returns the stripped content without <think> sections.
    """
    cleaned = re.sub(r"<think>.*?</think>", "", content, flags=re.DOTALL)

    if language:
        match = re.search(
            rf"```{language}\s*(.*?)```", cleaned, flags=re.DOTALL | re.IGNORECASE
        )
        if match:
            return match.group(1).strip()

    match = re.search(r"```\w*\s*(.*?)```", cleaned, flags=re.DOTALL)
    if match:
        return match.group(1).strip()

    return cleaned.strip()


class AIClient:
    """OpenAI client wrapper producing structured responses."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        timeout: int = 30,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        client: Optional[AsyncOpenAI] = None
    ):
        """Initialize the AI client.

        Args:
            api_key: OpenAI API key.
            model: Model name to use.
            base_url: Optional base URL for OpenAI-compatible APIs.
            timeout: Request timeout in seconds.
            max_attempts: Attempts per call for transient failures.
            base_delay: Initial retry delay in seconds.
            max_delay: Maximum retry delay in seconds.
            client: Pre-built client, mainly for tests.
        """
        logger.info("Initializing AIClient with model: %s, base_url: %s", model, base_url)

        self.client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout
        )
        self.model = model
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay

    async def generate_object(
        self,
        system_prompt: str,
        user_prompt: str,
        response_model: type[ModelT]
    ) -> ModelT:
        """Ask the model for an object conforming to ``response_model``.

        Args:
            system_prompt: System instructions.
            user_prompt: The user message.
            response_model: Pydantic model the reply must validate against.

        Returns:
            The validated response object.

        Raises:
            AIServiceError: On provider failure, an empty reply, or a reply
                that does not match the schema.
        """
        try:
            response = await retry_async(
                self._complete,
                system_prompt,
                user_prompt,
                response_model,
                max_attempts=self.max_attempts,
                base_delay=self.base_delay,
                max_delay=self.max_delay,
                retry_on=TRANSIENT_ERRORS,
            )
        except openai.OpenAIError as e:
            logger.error("Generation provider call failed: %s", e)
            raise AIServiceError(f"Generation provider call failed: {e}") from e

        if not response.choices:
            raise AIServiceError("Generation provider returned no choices")

        content = response.choices[0].message.content or ""
        payload = extract_code_block(content, "json")
        if not payload:
            raise AIServiceError("Generation provider returned an empty response")

        try:
            return response_model.model_validate_json(payload)
        except ValidationError as e:
            logger.warning(
                "Malformed %s response: %s", response_model.__name__, payload[:500]
            )
            raise AIServiceError(
                f"Response does not match {response_model.__name__}: {e}"
            ) from e

    async def _complete(
        self,
        system_prompt: str,
        user_prompt: str,
        response_model: type[BaseModel]
    ):
        return await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt}
            ],
            temperature=0.1,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": response_model.__name__,
                    "schema": response_model.model_json_schema(by_alias=True),
                },
            },
        )


def create_generation_provider(settings: Settings) -> Optional[AIClient]:
    """Build the generation provider for the configured environment.

    Args:
        settings: Application settings.

    Returns:
        An AIClient, or None when canned responses are to be used.

    Raises:
        ConfigurationError: If production runs without provider credentials.
    """
    if settings.use_canned_responses():
        logger.warning(
            "No OpenAI API key configured (environment=%s); "
            "using canned query and chart responses",
            settings.environment
        )
        return None
    if not settings.has_ai_credentials():
        raise ConfigurationError("OpenAI API key is required in production")

    return AIClient(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        base_url=settings.openai_base_url,
        timeout=settings.openai_timeout,
        max_attempts=settings.retry_max_attempts,
        base_delay=settings.retry_base_delay,
        max_delay=settings.retry_max_delay
    )
