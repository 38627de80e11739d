"""
Enrichment Agents - one item in, one facet out.

Every agent is the same shape: a prompt template parameterized only by the
item, one generation call under a fixed schema, and an extractor that turns
the schema instance into the facet value stored on ItemResult. Agents hold
no state and do not depend on each other, so they may run concurrently.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Tuple, Type

from pydantic import BaseModel

from foresight.errors import GenerationError
from foresight.pipeline import prompts
from foresight.pipeline.types import (
    FacetName,
    FutureTimelines,
    HistoricalAnalogy,
    Innovation,
    StakeholderAnalysis,
    TimelineEstimate,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_STAKEHOLDERS = 5


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class EnrichmentAgent:
    """A prompt template bound to a response schema."""
    facet: FacetName
    schema: Type[BaseModel]
    template: str
    extract: Callable[[Any], Any] = _identity

    @property
    def name(self) -> str:
        return self.facet.value

    def build_prompt(self, item: str) -> str:
        return self.template.format(item=item)

    async def run(self, client, item: str) -> Any:
        """
        Generate this agent's facet for one item.

        Raises:
            GenerationError: If the client fails or returns a value that is
                not an instance of this agent's schema
        """
        response = await client.generate(self.build_prompt(item), self.schema)
        if not isinstance(response, self.schema):
            raise GenerationError(
                f"{self.name} agent expected {self.schema.__name__}, got {type(response).__name__}",
                self.schema.__name__,
            )
        return self.extract(response)


def _stakeholder_extractor(limit: int) -> Callable[[StakeholderAnalysis], list]:
    def extract(analysis: StakeholderAnalysis) -> list:
        stakeholders = list(analysis.stakeholders)
        if len(stakeholders) > limit:
            logger.warning(f"Truncating {len(stakeholders)} stakeholders to {limit}")
            stakeholders = stakeholders[:limit]
        return stakeholders
    return extract


def build_enrichment_agents(max_stakeholders: int = DEFAULT_MAX_STAKEHOLDERS) -> Tuple[EnrichmentAgent, ...]:
    """The five facet agents, in invocation order."""
    return (
        EnrichmentAgent(
            facet=FacetName.ETA,
            schema=TimelineEstimate,
            template=prompts.ETA_PROMPT,
        ),
        EnrichmentAgent(
            facet=FacetName.ANALOGY,
            schema=HistoricalAnalogy,
            template=prompts.ANALOGY_PROMPT,
        ),
        EnrichmentAgent(
            facet=FacetName.STAKEHOLDERS,
            schema=StakeholderAnalysis,
            template=prompts.STAKEHOLDERS_PROMPT,
            extract=_stakeholder_extractor(max_stakeholders),
        ),
        EnrichmentAgent(
            facet=FacetName.INNOVATION,
            schema=Innovation,
            template=prompts.INNOVATION_PROMPT,
        ),
        EnrichmentAgent(
            facet=FacetName.FUTURE_TIMELINES,
            schema=FutureTimelines,
            template=prompts.FUTURE_TIMELINES_PROMPT,
        ),
    )


ENRICHMENT_AGENTS = build_enrichment_agents()
