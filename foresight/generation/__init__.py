"""Generation - the structured-output boundary to the language model."""

from foresight.generation.client import GenerationClient, get_openai_client
from foresight.generation.retry import RetryPolicy, NO_RETRY

__all__ = [
    "GenerationClient",
    "get_openai_client",
    "RetryPolicy",
    "NO_RETRY",
]
