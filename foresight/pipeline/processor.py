"""
Item Processor - runs every enrichment agent for one item.

Fail-fast: if any agent fails, the item fails and no ItemResult is
produced. With parallel agents enabled, the remaining in-flight agent
calls are cancelled on the first failure.
"""

import logging
from functools import partial
from typing import Any, List, Sequence

from foresight.errors import GenerationError
from foresight.pipeline.agents import ENRICHMENT_AGENTS, EnrichmentAgent
from foresight.pipeline.concurrency import gather_in_order
from foresight.pipeline.types import FacetName, ItemResult

logger = logging.getLogger(__name__)


class ItemProcessor:
    """Turns one item string into a complete ItemResult."""

    def __init__(
        self,
        client,
        agents: Sequence[EnrichmentAgent] = ENRICHMENT_AGENTS,
        parallel_agents: bool = False,
    ):
        facets = [agent.facet for agent in agents]
        if sorted(f.value for f in facets) != sorted(f.value for f in FacetName):
            raise ValueError(f"Agents must cover each facet exactly once, got {[f.value for f in facets]}")
        self.client = client
        self.agents = tuple(agents)
        self.parallel_agents = parallel_agents

    async def _run_agent(self, agent: EnrichmentAgent, item: str) -> Any:
        try:
            return await agent.run(self.client, item)
        except GenerationError as e:
            logger.error(f"{agent.name} agent failed for item {item!r}: {e}")
            raise

    async def process(self, item: str) -> ItemResult:
        """
        Generate all five facets for an item.

        Raises:
            GenerationError: If any agent fails
        """
        if self.parallel_agents:
            facets = await gather_in_order(
                [partial(self._run_agent, agent, item) for agent in self.agents]
            )
        else:
            facets: List[Any] = []
            for agent in self.agents:
                facets.append(await self._run_agent(agent, item))

        values = {agent.facet.value: facet for agent, facet in zip(self.agents, facets)}
        result = ItemResult(item=item, **values)

        logger.debug(f"Item complete: {item!r}")
        return result
