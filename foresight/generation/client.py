"""Generation Client - structured output from OpenAI.

The one place the pipeline talks to the model. A call either returns a
value validated against the requested pydantic schema, raw text when no
schema is given, or raises GenerationError. Callers never see a
partially-conforming value.

The client also owns:
- the in-flight cap (callers beyond it wait on a semaphore, nothing is dropped)
- the timeout knob, passed through to the OpenAI SDK
- the retry policy (off by default); the SDK's own retries are disabled
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, TypeVar, Union

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, ValidationError

from foresight.errors import GenerationError
from foresight.generation.retry import RetryPolicy, NO_RETRY

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."


def get_openai_client(settings) -> AsyncOpenAI:
    """Get the OpenAI client."""
    kwargs: Dict[str, Any] = {
        "api_key": settings.OPENAI_API_KEY,
        "max_retries": 0,
    }
    if settings.OPENAI_TIMEOUT_SECONDS is not None:
        kwargs["timeout"] = settings.OPENAI_TIMEOUT_SECONDS
    return AsyncOpenAI(**kwargs)


class GenerationClient:
    """
    Schema-constrained generation over the OpenAI chat completions API.

    Usage:
        client = GenerationClient.from_settings(settings)
        eta = await client.generate(prompt, TimelineEstimate)
        text = await client.generate(prompt)
    """

    def __init__(
        self,
        openai_client: AsyncOpenAI,
        model: str = "gpt-4o-mini",
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        max_in_flight: int = 4,
        retry_policy: RetryPolicy = NO_RETRY,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_in_flight < 1:
            raise ValueError("max_in_flight must be >= 1")
        self._client = openai_client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.system_prompt = system_prompt
        self.max_in_flight = max_in_flight
        self.retry_policy = retry_policy
        self._sleep = sleep
        self._slots = asyncio.Semaphore(max_in_flight)

    @classmethod
    def from_settings(cls, settings) -> "GenerationClient":
        if not settings.OPENAI_API_KEY:
            logger.warning("OPENAI_API_KEY not configured, generation calls will fail")
        return cls(
            openai_client=get_openai_client(settings),
            model=settings.OPENAI_MODEL,
            max_tokens=settings.OPENAI_MAX_TOKENS,
            temperature=settings.OPENAI_TEMPERATURE,
            system_prompt=settings.SYSTEM_PROMPT,
            max_in_flight=settings.GENERATION_MAX_IN_FLIGHT,
            retry_policy=RetryPolicy.from_settings(settings),
        )

    async def generate(
        self,
        prompt: str,
        schema: Optional[Type[T]] = None,
    ) -> Union[T, str]:
        """
        Run one generation, retrying per the configured policy.

        Args:
            prompt: User prompt
            schema: Pydantic model the response must conform to. When
                omitted, the raw message text is returned unvalidated.

        Returns:
            Validated schema instance, or text for schema-less calls

        Raises:
            GenerationError: If no conforming value could be produced
        """
        schema_name = schema.__name__ if schema is not None else "text"
        attempts = self.retry_policy.max_attempts

        for attempt in range(1, attempts + 1):
            try:
                async with self._slots:
                    logger.debug(f"Generation call schema={schema_name} attempt={attempt}/{attempts}")
                    if schema is None:
                        return await self._complete_text(prompt)
                    return await self._complete_structured(prompt, schema)
            except GenerationError as e:
                if attempt >= attempts:
                    if self.retry_policy.enabled:
                        logger.error(f"All {attempts} attempts failed for {schema_name}: {e}")
                    raise
                delay = self.retry_policy.delay_for(attempt)
                logger.warning(
                    f"Retry {attempt}/{attempts} for {schema_name} after {delay:.2f}s: {e}"
                )
                await self._sleep(delay)

        raise RuntimeError("Retry loop exited unexpectedly")

    def _messages(self, prompt: str) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": prompt},
        ]

    def _request_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"model": self.model}
        if self.max_tokens is not None:
            kwargs["max_tokens"] = self.max_tokens
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        return kwargs

    async def _complete_structured(self, prompt: str, schema: Type[T]) -> T:
        schema_name = schema.__name__
        try:
            completion = await self._client.chat.completions.parse(
                messages=self._messages(prompt),
                response_format=schema,
                **self._request_kwargs(),
            )
        except (OpenAIError, ValidationError) as e:
            raise GenerationError(
                f"Structured generation failed for {schema_name}: {e}", schema_name
            ) from e

        if not completion.choices:
            raise GenerationError(f"No choices returned for {schema_name}", schema_name)

        message = completion.choices[0].message
        if getattr(message, "refusal", None):
            raise GenerationError(f"Model refused {schema_name}: {message.refusal}", schema_name)
        if message.parsed is None:
            raise GenerationError(f"Empty parse for {schema_name}", schema_name)

        return message.parsed

    async def _complete_text(self, prompt: str) -> str:
        try:
            completion = await self._client.chat.completions.create(
                messages=self._messages(prompt),
                **self._request_kwargs(),
            )
        except OpenAIError as e:
            raise GenerationError(f"Text generation failed: {e}") from e

        if not completion.choices or not completion.choices[0].message.content:
            raise GenerationError("Empty text response")

        return completion.choices[0].message.content
