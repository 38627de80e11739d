"""
Document Assembler - renders a sealed RunResult as Markdown.

Pure and deterministic: the same RunResult always renders to the same
text. The only variable part is the optional generated-at line, which the
caller opts into. Absent optional fields are left out entirely rather
than rendered as empty placeholders.
"""

from typing import List

from foresight.pipeline.types import ItemResult, RunResult, ScenarioResult

DOCUMENT_TITLE = "Positive Future Scenarios for AI"

_COUNT_WORDS = {
    1: "ONE", 2: "TWO", 3: "THREE", 4: "FOUR", 5: "FIVE",
    6: "SIX", 7: "SEVEN", 8: "EIGHT", 9: "NINE", 10: "TEN",
}


def _count_line(count: int) -> str:
    word = _COUNT_WORDS.get(count, str(count))
    noun = "scenario" if count == 1 else "scenarios"
    return f"{word} distinct {noun} illustrating how AI can transform humanity."


def render_item(result: ItemResult) -> str:
    lines: List[str] = []

    lines.append(f"### {result.item}\n\n")
    lines.append(f"**ETA:** {result.eta.eta}\n\n")

    timelines = result.future_timelines
    lines.append("**Future Timelines:**\n\n")
    lines.append(f"- **Optimistic:** {timelines.optimistic}\n")
    lines.append(f"- **Pessimistic:** {timelines.pessimistic}\n")
    lines.append(f"- **Realistic:** {timelines.realistic}\n")
    if timelines.wildcard:
        lines.append(f"- **Wildcard Event:** {timelines.wildcard}\n")
    lines.append("\n")

    analogy = result.analogy
    lines.append("**Historical Analogy:**\n\n")
    lines.append(f"- **Event:** {analogy.event}\n")
    lines.append(f"- **Similarity:** {analogy.similarity}\n")
    lines.append(f"- **Lesson:** {analogy.lesson}\n\n")

    if result.stakeholders:
        lines.append("**Stakeholders:**\n\n")
        for stakeholder in result.stakeholders:
            if stakeholder.description:
                lines.append(f"- **{stakeholder.name}:** {stakeholder.role} - {stakeholder.description}\n")
            else:
                lines.append(f"- **{stakeholder.name}:** {stakeholder.role}\n")
        lines.append("\n")

    innovation = result.innovation
    lines.append("**Innovation - Moonshot Idea:**\n\n")
    lines.append(f"{innovation.idea}\n\n")
    lines.append(f"**Potential Impact:** {innovation.potential}\n\n")
    lines.append(f"**Challenges:** {innovation.challenges}\n\n")

    return "".join(lines)


def render_scenario(result: ScenarioResult) -> str:
    parts = [
        f"## {result.scenario.title}\n\n",
        f"{result.scenario.description}\n\n",
    ]
    parts.extend(render_item(item) for item in result.items)
    return "".join(parts)


def render_document(run: RunResult, include_timestamp: bool = False) -> str:
    """
    Render a sealed run.

    Args:
        run: Sealed RunResult
        include_timestamp: Add a generated-at line (the run's sealed_at)
            under the header. Off by default so output is byte-stable.

    Returns:
        Markdown document
    """
    parts = [
        f"# {DOCUMENT_TITLE}\n\n",
        f'Based on the topic: "{run.topic}"\n\n',
        f"{_count_line(len(run.scenarios))}\n\n",
    ]
    if include_timestamp:
        parts.append(f"_Generated: {run.sealed_at.isoformat()}_\n\n")

    parts.extend(render_scenario(scenario) for scenario in run.scenarios)
    return "".join(parts)
