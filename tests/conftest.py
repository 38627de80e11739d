"""Shared test fixtures for the Foresight pipeline tests."""
import asyncio
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from pydantic import BaseModel

from foresight.errors import GenerationError
from foresight.pipeline.types import (
    FutureTimelines,
    HistoricalAnalogy,
    Innovation,
    ItemResult,
    RunResult,
    Scenario,
    ScenarioBatch,
    ScenarioResult,
    Stakeholder,
    StakeholderAnalysis,
    TimelineEstimate,
    TopicList,
)

_QUOTED = re.compile(r'"([^"]+)"')


def item_from_prompt(prompt: str) -> str:
    """Facet prompts quote the item; pull it back out."""
    match = _QUOTED.search(prompt)
    return match.group(1) if match else prompt


def default_facet(schema, item: str) -> BaseModel:
    if schema is TimelineEstimate:
        return TimelineEstimate(eta=f"ETA for {item}")
    if schema is HistoricalAnalogy:
        return HistoricalAnalogy(
            event=f"Event for {item}",
            similarity=f"Similarity for {item}",
            lesson=f"Lesson for {item}",
        )
    if schema is StakeholderAnalysis:
        return StakeholderAnalysis(stakeholders=[
            Stakeholder(name=f"Stakeholder for {item}", role="Beneficiary", description=f"Gains from {item}"),
        ])
    if schema is Innovation:
        return Innovation(
            idea=f"Idea for {item}",
            potential=f"Potential for {item}",
            challenges=f"Challenges for {item}",
        )
    if schema is FutureTimelines:
        return FutureTimelines(
            optimistic=f"Optimistic for {item}",
            pessimistic=f"Pessimistic for {item}",
            realistic=f"Realistic for {item}",
            wildcard=f"Wildcard for {item}",
        )
    raise KeyError(schema)


class FakeGenerationClient:
    """
    Scripted stand-in for GenerationClient.

    Responds by schema: explicit responses win, otherwise facets are
    derived from the quoted item in the prompt. Records every call and the
    peak number of calls in flight.
    """

    def __init__(
        self,
        responses: Optional[Dict[Any, Any]] = None,
        fail_on: Optional[Callable[[str, Any], bool]] = None,
        delay: Optional[Callable[[str, Any], float]] = None,
    ):
        self.responses = dict(responses or {})
        self.fail_on = fail_on
        self.delay = delay
        self.calls: List[Tuple[str, Any]] = []
        self.completed: List[Tuple[str, Any]] = []
        self.cancelled: List[Tuple[str, Any]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def generate(self, prompt: str, schema=None):
        self.calls.append((prompt, schema))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay(prompt, schema) if self.delay else 0)
            if self.fail_on and self.fail_on(prompt, schema):
                name = schema.__name__ if schema is not None else "text"
                raise GenerationError(f"scripted failure for {name}", name)
            if schema in self.responses:
                value = self.responses[schema]
                if callable(value) and not isinstance(value, BaseModel):
                    value = value(prompt)
            else:
                value = default_facet(schema, item_from_prompt(prompt))
            self.completed.append((prompt, schema))
            return value
        except asyncio.CancelledError:
            self.cancelled.append((prompt, schema))
            raise
        finally:
            self.in_flight -= 1

    def calls_for(self, schema) -> List[str]:
        return [prompt for prompt, s in self.calls if s is schema]


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def energy_scenario():
    """The single scenario of the clean-energy end-to-end run."""
    return Scenario(
        title="Grid-Scale Storage",
        description="AI-designed storage keeps renewable grids stable around the clock.",
        items=["breakthrough battery chemistry", "smart grid rollout"],
    )


@pytest.fixture
def three_item_scenario():
    return Scenario(
        title="Open Science Commons",
        description="AI agents accelerate shared research.",
        items=["automated lab assistants", "open model registries", "global peer review network"],
    )


@pytest.fixture
def fake_client_factory():
    """Build a FakeGenerationClient with a scripted scenario batch."""
    def factory(scenarios: List[Scenario], **kwargs) -> FakeGenerationClient:
        responses = kwargs.pop("responses", {})
        responses.setdefault(ScenarioBatch, ScenarioBatch(scenarios=scenarios))
        responses.setdefault(TopicList, TopicList(topics=[f"Topic {i}" for i in range(10)]))
        return FakeGenerationClient(responses=responses, **kwargs)
    return factory


@pytest.fixture
def make_item_result():
    """Build a complete ItemResult with deterministic facet text."""
    def factory(item: str, wildcard: Optional[str] = "default", stakeholders=None) -> ItemResult:
        timelines = default_facet(FutureTimelines, item)
        if wildcard != "default":
            timelines = timelines.model_copy(update={"wildcard": wildcard})
        return ItemResult(
            item=item,
            eta=default_facet(TimelineEstimate, item),
            analogy=default_facet(HistoricalAnalogy, item),
            stakeholders=(
                default_facet(StakeholderAnalysis, item).stakeholders
                if stakeholders is None else stakeholders
            ),
            innovation=default_facet(Innovation, item),
            future_timelines=timelines,
        )
    return factory


@pytest.fixture
def sample_run(energy_scenario, make_item_result):
    """A sealed run for the clean-energy topic."""
    return RunResult(
        run_id="run_20260101_120000_abcd1234",
        topic="clean energy storage",
        scenarios=[
            ScenarioResult(
                scenario=energy_scenario,
                items=[make_item_result(item) for item in energy_scenario.items],
            )
        ],
        started_at=datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
        sealed_at=datetime(2026, 1, 1, 12, 5, 0, tzinfo=timezone.utc),
    )
