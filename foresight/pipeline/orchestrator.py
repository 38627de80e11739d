"""
Pipeline Orchestrator - drives one run from topic to published result.

State machine per run:
    IDLE -> EXPANDING_SCENARIOS -> PROCESSING_ITEMS -> SEALED
    any non-terminal state -> FAILED

Scenarios are processed one at a time, in expansion order. Items within a
scenario run with up to ``item_concurrency`` in flight (1 = strictly
sequential); each result lands in the slot reserved for its position.
Any item failure abandons the whole run: sibling items are cancelled,
nothing is sealed, rendered, persisted or published, and the previously
published run stays current.
"""

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import List, Optional, Sequence

from foresight.errors import ExpansionError, GenerationError, RunAbortedError
from foresight.pipeline.agents import EnrichmentAgent, build_enrichment_agents
from foresight.pipeline.concurrency import gather_in_order
from foresight.pipeline.document import render_document
from foresight.pipeline.expander import expand_scenarios
from foresight.pipeline.processor import ItemProcessor
from foresight.pipeline.types import (
    ItemResult,
    RunBuilder,
    RunResult,
    RunState,
    Scenario,
    ScenarioResult,
)
from foresight.store import ResultSlot, RunStore

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for pipeline execution."""
    scenario_count: int = 2
    items_min: int = 3
    items_max: int = 5
    max_stakeholders: int = 5
    parallel_agents: bool = False     # Run the five agents of an item concurrently
    item_concurrency: int = 1         # Items of one scenario in flight at once
    include_timestamp: bool = False   # Generated-at line in the document header

    def __post_init__(self):
        if self.scenario_count < 1:
            raise ValueError("scenario_count must be >= 1")
        if not 1 <= self.items_min <= self.items_max:
            raise ValueError("items range must satisfy 1 <= items_min <= items_max")
        if self.item_concurrency < 1:
            raise ValueError("item_concurrency must be >= 1")

    @classmethod
    def from_settings(cls, settings) -> "PipelineConfig":
        return cls(
            scenario_count=settings.SCENARIO_COUNT,
            items_min=settings.ITEMS_MIN,
            items_max=settings.ITEMS_MAX,
            max_stakeholders=settings.MAX_STAKEHOLDERS,
            parallel_agents=settings.PIPELINE_PARALLEL_AGENTS,
            item_concurrency=settings.PIPELINE_ITEM_CONCURRENCY,
        )


@dataclass
class RunOutcome:
    """A successful run: the sealed result, its document and where it was saved."""
    run: RunResult
    document: str
    location: Path


class PipelineOrchestrator:
    """
    Runs the pipeline and owns the current-result slot.

    One logical run at a time; a second concurrent run() is rejected.
    """

    def __init__(
        self,
        client,
        store: RunStore,
        slot: Optional[ResultSlot] = None,
        config: Optional[PipelineConfig] = None,
        agents: Optional[Sequence[EnrichmentAgent]] = None,
    ):
        self.config = config or PipelineConfig()
        self.client = client
        self.store = store
        self.slot = slot or ResultSlot()
        self.processor = ItemProcessor(
            client,
            agents=agents or build_enrichment_agents(self.config.max_stakeholders),
            parallel_agents=self.config.parallel_agents,
        )
        self.state = RunState.IDLE
        self._running = False

    def current_result(self) -> Optional[RunResult]:
        """Latest published run, or None before the first success."""
        return self.slot.current()

    async def run(self, topic: str) -> RunOutcome:
        """
        Run the full pipeline for one topic.

        Raises:
            ExpansionError: Scenario expansion failed or was malformed
            RunAbortedError: An item failed; the run was abandoned
        """
        if not topic or not topic.strip():
            raise ValueError("topic must be a non-empty string")
        if self._running:
            raise RuntimeError("A run is already in progress")

        self._running = True
        try:
            return await self._run(topic.strip())
        finally:
            self._running = False

    async def _run(self, topic: str) -> RunOutcome:
        builder = RunBuilder(topic=topic)
        self.state = RunState.EXPANDING_SCENARIOS
        logger.info(f"Generating scenarios based on: {topic}")

        try:
            scenarios = await expand_scenarios(
                self.client,
                topic,
                count=self.config.scenario_count,
                items_per_scenario=(self.config.items_min, self.config.items_max),
            )
            logger.info(f"Expanded topic into {len(scenarios)} scenarios")

            self.state = RunState.PROCESSING_ITEMS
            for scenario in scenarios:
                logger.info(f"Scenario: {scenario.title} ({len(scenario.items)} items)")
                items = await self._process_scenario(scenario)
                builder.add_scenario(ScenarioResult(scenario=scenario, items=items))

            run = builder.seal()
        except (Exception, asyncio.CancelledError) as e:
            self.state = RunState.FAILED
            if isinstance(e, (ExpansionError, RunAbortedError)):
                logger.error(f"Run {builder.run_id} failed: {e}")
            raise

        self.state = RunState.SEALED
        logger.info(f"Run {run.run_id} sealed with {len(run.scenarios)} scenarios")

        document = render_document(run, include_timestamp=self.config.include_timestamp)
        location = await asyncio.to_thread(self.store.persist, document)
        self.slot.publish(run)

        return RunOutcome(run=run, document=document, location=location)

    async def _process_item(self, scenario: Scenario, item: str) -> ItemResult:
        try:
            result = await self.processor.process(item)
        except GenerationError as e:
            raise RunAbortedError(
                f"Item {item!r} of scenario {scenario.title!r} failed: {e}",
                scenario_title=scenario.title,
                item=item,
            ) from e

        logger.info(f"  Item: {item}")
        logger.debug(f"    {result.model_dump_json(by_alias=True)}")
        return result

    async def _process_scenario(self, scenario: Scenario) -> List[ItemResult]:
        if self.config.item_concurrency == 1:
            return [await self._process_item(scenario, item) for item in scenario.items]

        return await gather_in_order(
            [partial(self._process_item, scenario, item) for item in scenario.items],
            limit=self.config.item_concurrency,
        )
