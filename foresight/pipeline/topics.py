"""Topic candidates and selection for runs started without a topic."""

import logging
from typing import List, Optional

from foresight.errors import GenerationError
from foresight.pipeline.prompts import TOPICS_PROMPT
from foresight.pipeline.types import TopicList

logger = logging.getLogger(__name__)

DEFAULT_TOPIC_COUNT = 10


async def generate_topics(client, count: int = DEFAULT_TOPIC_COUNT) -> List[str]:
    """Ask the model for candidate topics; blank entries are dropped."""
    response = await client.generate(TOPICS_PROMPT.format(count=count), TopicList)
    topics = [t.strip() for t in response.topics if t and t.strip()]
    if not topics:
        raise GenerationError("No topics generated", TopicList.__name__)
    return topics[:count]


def select_topic(topics: List[str], selection: Optional[str]) -> str:
    """
    Pick a topic by index.

    An invalid or out-of-range selection falls back to the first topic.
    """
    if not topics:
        raise ValueError("No topics to select from")

    try:
        index = int((selection or "").strip())
    except ValueError:
        index = -1

    if 0 <= index < len(topics):
        return topics[index]

    logger.info(f"Invalid selection {selection!r}, using the first topic")
    return topics[0]
