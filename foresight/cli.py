"""
Foresight command line.

Obtains a topic (free text, or a pick from generated candidates), runs the
pipeline once, then serves the latest result over HTTP.

Usage:
    # Interactive topic prompt, then serve on the configured port
    python -m foresight

    # Non-interactive run without the server
    python -m foresight --topic "clean energy storage" --no-serve
"""
import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional

from foresight.config import settings
from foresight.errors import PipelineError
from foresight.generation import GenerationClient
from foresight.pipeline import (
    PipelineConfig,
    PipelineOrchestrator,
    RunOutcome,
    generate_topics,
    select_topic,
)
from foresight.store import ResultSlot, RunStore

logger = logging.getLogger("foresight")

TOPIC_PROMPT = "Enter a scenario prompt (or press Enter for AI-generated topics): "
SELECTION_PROMPT = "Your selection: "


async def resolve_topic(
    client,
    topic: Optional[str],
    input_fn: Callable[[str], str] = input,
    candidates: int = 10,
) -> str:
    """Use the given topic, or ask for one, falling back to generated candidates."""
    if topic is None:
        topic = input_fn(TOPIC_PROMPT)
    topic = topic.strip()
    if topic:
        return topic

    topics = await generate_topics(client, candidates)
    print(f"Select a topic by entering its number (0-{len(topics) - 1}):")
    for index, candidate in enumerate(topics):
        print(f"{index}: {candidate}")

    return select_topic(topics, input_fn(SELECTION_PROMPT))


async def run_once(
    orchestrator: PipelineOrchestrator,
    topic: Optional[str],
    input_fn: Callable[[str], str] = input,
    candidates: int = 10,
) -> Optional[RunOutcome]:
    """Resolve a topic and run the pipeline; failures are logged and yield None."""
    try:
        selected = await resolve_topic(orchestrator.client, topic, input_fn, candidates)
        outcome = await orchestrator.run(selected)
    except PipelineError as e:
        logger.exception(f"Pipeline failed: {e}")
        return None
    except OSError as e:
        logger.exception(f"Could not save the document: {e}")
        return None

    logger.info(f"Document saved to {outcome.location}")
    return outcome


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Foresight - elaborate a topic into positive AI future scenarios",
    )
    parser.add_argument("--topic", type=str, help="Topic to elaborate (skips the interactive prompt)")
    parser.add_argument(
        "--scenarios",
        type=int,
        default=settings.SCENARIO_COUNT,
        help=f"Number of scenarios to generate. Default: {settings.SCENARIO_COUNT}",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        help=f"Directory for rendered documents. Default: {settings.OUTPUT_DIR}",
    )
    parser.add_argument(
        "--parallel-agents",
        action="store_true",
        default=settings.PIPELINE_PARALLEL_AGENTS,
        help="Run the five enrichment agents of an item concurrently",
    )
    parser.add_argument(
        "--item-concurrency",
        type=int,
        default=settings.PIPELINE_ITEM_CONCURRENCY,
        help="Items of one scenario processed at once. Default: sequential",
    )
    parser.add_argument(
        "--timestamp",
        action="store_true",
        help="Include a generated-at line in the document header",
    )
    parser.add_argument("--no-serve", action="store_true", help="Exit after the run instead of serving results")
    parser.add_argument("--host", type=str, default=settings.HOST, help="API host")
    parser.add_argument("--port", type=int, default=settings.PORT, help="API port")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    return parser


def main(argv=None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    config = replace(
        PipelineConfig.from_settings(settings),
        scenario_count=args.scenarios,
        parallel_agents=args.parallel_agents,
        item_concurrency=args.item_concurrency,
        include_timestamp=args.timestamp,
    )
    store = RunStore(
        directory=Path(args.output_dir or settings.OUTPUT_DIR),
        prefix=settings.OUTPUT_PREFIX,
    )
    slot = ResultSlot()
    orchestrator = PipelineOrchestrator(
        client=GenerationClient.from_settings(settings),
        store=store,
        slot=slot,
        config=config,
    )

    outcome = asyncio.run(
        run_once(orchestrator, args.topic, candidates=settings.TOPIC_CANDIDATES)
    )

    if args.no_serve:
        return 0 if outcome else 1

    import uvicorn
    from foresight.main import create_app

    logger.info(f"Server listening at http://{args.host}:{args.port}")
    uvicorn.run(create_app(slot), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
