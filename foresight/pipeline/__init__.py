"""
Scenario Pipeline - topic to scenarios to enriched items to one document.

1. expand_scenarios() - topic -> ordered scenarios
2. ItemProcessor.process() - item -> ItemResult via five enrichment agents
3. PipelineOrchestrator.run() - fan-out / fan-in, sealing, failure policy
4. render_document() - sealed RunResult -> Markdown
"""

from foresight.pipeline.types import (
    FutureTimelines,
    HistoricalAnalogy,
    Innovation,
    ItemResult,
    RunBuilder,
    RunResult,
    RunState,
    Scenario,
    ScenarioBatch,
    ScenarioResult,
    Stakeholder,
    StakeholderAnalysis,
    TimelineEstimate,
    TopicList,
)
from foresight.pipeline.agents import ENRICHMENT_AGENTS, EnrichmentAgent, build_enrichment_agents
from foresight.pipeline.expander import expand_scenarios
from foresight.pipeline.processor import ItemProcessor
from foresight.pipeline.document import render_document
from foresight.pipeline.topics import generate_topics, select_topic
from foresight.pipeline.orchestrator import PipelineConfig, PipelineOrchestrator, RunOutcome

__all__ = [
    "FutureTimelines",
    "HistoricalAnalogy",
    "Innovation",
    "ItemResult",
    "RunBuilder",
    "RunResult",
    "RunState",
    "Scenario",
    "ScenarioBatch",
    "ScenarioResult",
    "Stakeholder",
    "StakeholderAnalysis",
    "TimelineEstimate",
    "TopicList",
    "ENRICHMENT_AGENTS",
    "EnrichmentAgent",
    "build_enrichment_agents",
    "expand_scenarios",
    "ItemProcessor",
    "render_document",
    "generate_topics",
    "select_topic",
    "PipelineConfig",
    "PipelineOrchestrator",
    "RunOutcome",
]
