"""
Tests for the item processor.

Tests cover:
- Complete ItemResult with all five facets
- Fail-fast: no partial ItemResult on any agent failure
- Parallel agents: same result, cancellation of siblings on failure
"""

import pytest
from pydantic import ValidationError

from foresight.errors import GenerationError
from foresight.pipeline.agents import ENRICHMENT_AGENTS
from foresight.pipeline.processor import ItemProcessor
from foresight.pipeline.types import (
    FutureTimelines,
    HistoricalAnalogy,
    Innovation,
    ItemResult,
    StakeholderAnalysis,
    TimelineEstimate,
)

from conftest import FakeGenerationClient


class TestItemProcessor:
    """Tests for ItemProcessor.process."""

    @pytest.mark.asyncio
    async def test_all_five_facets_present(self):
        client = FakeGenerationClient()

        result = await ItemProcessor(client).process("smart grid rollout")

        assert result.item == "smart grid rollout"
        assert result.eta.eta == "ETA for smart grid rollout"
        assert result.analogy.event == "Event for smart grid rollout"
        assert result.stakeholders[0].role == "Beneficiary"
        assert result.innovation.idea == "Idea for smart grid rollout"
        assert result.future_timelines.wildcard == "Wildcard for smart grid rollout"
        assert len(client.calls) == 5

    @pytest.mark.asyncio
    async def test_sequential_call_order(self):
        client = FakeGenerationClient()

        await ItemProcessor(client).process("item")

        assert [schema for _, schema in client.calls] == [agent.schema for agent in ENRICHMENT_AGENTS]

    @pytest.mark.asyncio
    async def test_failure_stops_remaining_agents(self):
        client = FakeGenerationClient(fail_on=lambda prompt, schema: schema is StakeholderAnalysis)

        with pytest.raises(GenerationError):
            await ItemProcessor(client).process("item")

        called = [schema for _, schema in client.calls]
        assert called == [TimelineEstimate, HistoricalAnalogy, StakeholderAnalysis]
        assert Innovation not in called

    @pytest.mark.asyncio
    async def test_parallel_matches_sequential(self):
        sequential = await ItemProcessor(FakeGenerationClient()).process("item")
        parallel_client = FakeGenerationClient()

        parallel = await ItemProcessor(parallel_client, parallel_agents=True).process("item")

        assert parallel == sequential
        assert parallel_client.max_in_flight == 5

    @pytest.mark.asyncio
    async def test_parallel_failure_cancels_siblings(self):
        def delay(prompt, schema):
            return 0 if schema is TimelineEstimate else 0.5

        client = FakeGenerationClient(
            fail_on=lambda prompt, schema: schema is TimelineEstimate,
            delay=delay,
        )

        with pytest.raises(GenerationError):
            await ItemProcessor(client, parallel_agents=True).process("item")

        assert len(client.cancelled) == 4
        assert client.completed == []
        assert client.in_flight == 0

    def test_agents_must_cover_every_facet(self):
        with pytest.raises(ValueError, match="each facet"):
            ItemProcessor(FakeGenerationClient(), agents=ENRICHMENT_AGENTS[:4])


class TestItemResultCompleteness:
    """An ItemResult cannot be built with a facet missing."""

    @pytest.mark.parametrize(
        "missing", ["eta", "analogy", "stakeholders", "innovation", "futureTimelines"]
    )
    def test_missing_facet_rejected(self, missing):
        facets = {
            "eta": TimelineEstimate(eta="soon"),
            "analogy": HistoricalAnalogy(event="e", similarity="s", lesson="l"),
            "stakeholders": [],
            "innovation": Innovation(idea="i", potential="p", challenges="c"),
            "futureTimelines": FutureTimelines(optimistic="o", pessimistic="p", realistic="r"),
        }
        del facets[missing]

        with pytest.raises(ValidationError):
            ItemResult(item="item", **facets)

    @pytest.mark.asyncio
    async def test_item_result_is_frozen(self):
        result = await ItemProcessor(FakeGenerationClient()).process("item")

        with pytest.raises(ValidationError):
            result.item = "other"
