"""Pipeline error taxonomy.

Every failure surfaces to the caller of a run as one of these; none are
swallowed inside the pipeline.
"""
from typing import Optional


class PipelineError(Exception):
    """Base class for all pipeline failures."""


class GenerationError(PipelineError):
    """The generation client could not produce a schema-conforming value.

    Network failures, model refusals and validation failures all land here;
    the original exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, schema_name: Optional[str] = None):
        super().__init__(message)
        self.schema_name = schema_name


class ExpansionError(PipelineError):
    """The scenario expander produced zero or malformed scenarios."""


class RunAbortedError(PipelineError):
    """An item failed mid-run, so the whole run was abandoned."""

    def __init__(self, message: str, scenario_title: str, item: str):
        super().__init__(message)
        self.scenario_title = scenario_title
        self.item = item
