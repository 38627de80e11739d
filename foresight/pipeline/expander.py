"""
Scenario Expander - one topic into an ordered list of scenarios.

One generation call under the ScenarioBatch schema. The result is held to
the pipeline's shape before any item processing starts: at least one
scenario, each with an item count inside the configured range and no
blank items. Anything else fails the run as ExpansionError.
"""

import logging
from typing import Any, List, Tuple

from foresight.errors import ExpansionError, GenerationError
from foresight.pipeline.prompts import SCENARIOS_PROMPT
from foresight.pipeline.types import Scenario, ScenarioBatch

logger = logging.getLogger(__name__)

DEFAULT_ITEMS_PER_SCENARIO = (3, 5)


def build_scenarios_prompt(topic: str, count: int, items_per_scenario: Tuple[int, int]) -> str:
    items_min, items_max = items_per_scenario
    return SCENARIOS_PROMPT.format(
        topic=topic,
        count=count,
        items_min=items_min,
        items_max=items_max,
    )


def normalize_scenarios(response: Any) -> List[Scenario]:
    """
    Coerce a generation response into a list of scenarios.

    A bare Scenario (instead of a batch) becomes a one-element list.
    """
    if isinstance(response, ScenarioBatch):
        return list(response.scenarios)
    if isinstance(response, Scenario):
        logger.warning("Scenario expander received a single scenario object, wrapping it in a list")
        return [response]
    if isinstance(response, list):
        if all(isinstance(s, Scenario) for s in response):
            return list(response)
    raise ExpansionError(f"Malformed scenario response of type {type(response).__name__}")


def _check_scenario(index: int, scenario: Scenario, items_per_scenario: Tuple[int, int]) -> None:
    items_min, items_max = items_per_scenario
    count = len(scenario.items)
    if count < items_min or count > items_max:
        raise ExpansionError(
            f"Scenario {index} ({scenario.title!r}) has {count} items, "
            f"expected {items_min}-{items_max}"
        )
    for item in scenario.items:
        if not item or not item.strip():
            raise ExpansionError(f"Scenario {index} ({scenario.title!r}) contains a blank item")


async def expand_scenarios(
    client,
    topic: str,
    count: int,
    items_per_scenario: Tuple[int, int] = DEFAULT_ITEMS_PER_SCENARIO,
) -> List[Scenario]:
    """
    Expand a topic into scenarios.

    Args:
        client: Generation client
        topic: Non-empty topic string
        count: Number of scenarios to request; extra scenarios are dropped
        items_per_scenario: Inclusive (min, max) item count per scenario

    Returns:
        Ordered list of at least one scenario

    Raises:
        ExpansionError: On generation failure, zero scenarios, or a
            scenario that violates the item range
    """
    if count < 1:
        raise ValueError("count must be >= 1")

    prompt = build_scenarios_prompt(topic, count, items_per_scenario)
    try:
        response = await client.generate(prompt, ScenarioBatch)
    except GenerationError as e:
        raise ExpansionError(f"Scenario generation failed for topic {topic!r}: {e}") from e

    scenarios = normalize_scenarios(response)
    if not scenarios:
        raise ExpansionError(f"No scenarios generated for topic {topic!r}")

    if len(scenarios) > count:
        logger.info(f"Received {len(scenarios)} scenarios, keeping the first {count}")
        scenarios = scenarios[:count]

    for index, scenario in enumerate(scenarios):
        _check_scenario(index, scenario, items_per_scenario)

    return scenarios
