"""
Pipeline Types - Schema contracts and run records.

Two families of models live here:
- Response schemas: the closed shapes the generation client is asked to fill
  (scenario batch, the five facet shapes, topic list).
- Run records: ItemResult, ScenarioResult and the sealed RunResult that is
  rendered, persisted and published.

Run records serialize with the camelCase keys of the published JSON
(``futureTimelines``, ``startedAt`` ...), via aliases.
"""

from enum import Enum
from typing import Optional, List
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================

class RunState(str, Enum):
    """Lifecycle of a single pipeline run."""
    IDLE = "idle"
    EXPANDING_SCENARIOS = "expanding_scenarios"
    PROCESSING_ITEMS = "processing_items"
    SEALED = "sealed"    # Terminal success
    FAILED = "failed"    # Terminal failure


class FacetName(str, Enum):
    """Facets attached to every item, keyed by their ItemResult field."""
    ETA = "eta"
    ANALOGY = "analogy"
    STAKEHOLDERS = "stakeholders"
    INNOVATION = "innovation"
    FUTURE_TIMELINES = "future_timelines"


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class Scenario(BaseModel):
    """A scenario: a titled, described sequence of concrete steps."""
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Short, descriptive title")
    description: str = Field(..., description="Concise explanation of the scenario")
    items: List[str] = Field(..., description="Specific steps or events that contribute to the scenario")


class ScenarioBatch(BaseModel):
    """Scenario-list shape requested from the scenario expander."""
    scenarios: List[Scenario] = Field(..., description="Distinct scenarios for the topic")


class TimelineEstimate(BaseModel):
    """Estimated time of arrival for an item."""
    model_config = ConfigDict(frozen=True)

    eta: str = Field(..., description="Concise sentence describing the estimated timeline")


class HistoricalAnalogy(BaseModel):
    """A historical event that mirrors the item."""
    model_config = ConfigDict(frozen=True)

    event: str = Field(..., description="Name or brief description of the historical event")
    similarity: str = Field(..., description="Key similarities between the event and the item")
    lesson: str = Field(..., description="Lesson that carries over to the item")


class Stakeholder(BaseModel):
    """A party significantly affected by an item."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Name or type of stakeholder")
    role: str = Field(..., description="Role of the stakeholder (e.g. Beneficiary, Regulator)")
    description: Optional[str] = Field(None, description="The stakeholder's part in this step")

    @field_validator("description")
    @classmethod
    def _blank_description_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class StakeholderAnalysis(BaseModel):
    """Wrapper shape for the stakeholder agent (schemas must be objects)."""
    stakeholders: List[Stakeholder] = Field(default_factory=list, description="Up to 5 key stakeholders")


class Innovation(BaseModel):
    """A moonshot idea that would accelerate the item."""
    model_config = ConfigDict(frozen=True)

    idea: str = Field(..., description="Description of the innovative idea")
    potential: str = Field(..., description="Potential positive impact")
    challenges: str = Field(..., description="Obstacles to realizing it")


class FutureTimelines(BaseModel):
    """Three projected timelines plus an optional wildcard event."""
    model_config = ConfigDict(frozen=True)

    optimistic: str = Field(..., description="Advancements and adoption happen quickly")
    pessimistic: str = Field(..., description="Progress is slow and challenges arise")
    realistic: str = Field(..., description="Balanced view of advances and obstacles")
    wildcard: Optional[str] = Field(None, description="Event that could significantly alter the timelines")

    @field_validator("wildcard")
    @classmethod
    def _blank_wildcard_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class TopicList(BaseModel):
    """Candidate topics offered when the user supplies none."""
    topics: List[str] = Field(..., description="Brief phrases, one per topic")


# =============================================================================
# RUN RECORDS
# =============================================================================

class ItemResult(BaseModel):
    """
    One item with all five facets.

    Every facet is required, so an incomplete ItemResult cannot exist.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    item: str
    eta: TimelineEstimate
    analogy: HistoricalAnalogy
    stakeholders: List[Stakeholder]
    innovation: Innovation
    future_timelines: FutureTimelines = Field(..., alias="futureTimelines")


class ScenarioResult(BaseModel):
    """A scenario and its item results, in the scenario's item order."""
    model_config = ConfigDict(frozen=True)

    scenario: Scenario
    items: List[ItemResult] = Field(default_factory=list)


class RunResult(BaseModel):
    """Sealed, immutable result of a run."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    run_id: str = Field(..., alias="runId")
    topic: str
    scenarios: List[ScenarioResult] = Field(default_factory=list)
    started_at: datetime = Field(..., alias="startedAt")
    sealed_at: datetime = Field(..., alias="sealedAt")

    @field_validator("topic")
    @classmethod
    def _topic_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("topic must be a non-empty string")
        return value

    def to_json(self) -> dict:
        """Full run as published JSON."""
        return self.model_dump(mode="json", by_alias=True)

    def scenarios_json(self) -> list:
        """Scenario results only, as served by the query endpoint."""
        return [s.model_dump(mode="json", by_alias=True) for s in self.scenarios]


def _new_run_id(started_at: datetime) -> str:
    return f"run_{started_at.strftime('%Y%m%d_%H%M%S')}_{uuid4().hex[:8]}"


@dataclass
class RunBuilder:
    """
    Mutable accumulator for a run in progress.

    Scenario results are appended as they complete; seal() freezes the
    builder and returns the publishable RunResult.
    """
    topic: str
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    run_id: str = ""
    scenarios: List[ScenarioResult] = field(default_factory=list)
    sealed: bool = False

    def __post_init__(self):
        if not self.topic or not self.topic.strip():
            raise ValueError("topic must be a non-empty string")
        if not self.run_id:
            self.run_id = _new_run_id(self.started_at)

    def add_scenario(self, result: ScenarioResult) -> None:
        if self.sealed:
            raise RuntimeError(f"Run {self.run_id} is sealed")
        self.scenarios.append(result)

    def seal(self) -> RunResult:
        if self.sealed:
            raise RuntimeError(f"Run {self.run_id} is already sealed")
        self.sealed = True
        return RunResult(
            run_id=self.run_id,
            topic=self.topic,
            scenarios=list(self.scenarios),
            started_at=self.started_at,
            sealed_at=datetime.now(timezone.utc),
        )
