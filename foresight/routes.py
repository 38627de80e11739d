"""Scenario API Routes.

Read-only views of the current published run:
- GET /scenarios - Scenario results of the latest run ([] before the first run)
- GET /run - The full latest run with metadata
"""
from fastapi import APIRouter, Depends, HTTPException, Request
from typing import Any, Dict, List

from foresight.store import ResultSlot


router = APIRouter()


def get_result_slot(request: Request) -> ResultSlot:
    """Result slot attached to the application at startup."""
    return request.app.state.result_slot


@router.get("/scenarios")
async def list_scenarios(
    slot: ResultSlot = Depends(get_result_slot),
) -> List[Dict[str, Any]]:
    """
    Scenario results of the latest sealed run.

    Each entry holds the scenario (title, description, items) and its item
    results with every facet. Empty until a run has completed.
    """
    run = slot.current()
    if run is None:
        return []
    return run.scenarios_json()


@router.get("/run")
async def get_current_run(
    slot: ResultSlot = Depends(get_result_slot),
) -> Dict[str, Any]:
    """The latest sealed run including topic and timestamps."""
    run = slot.current()
    if run is None:
        raise HTTPException(status_code=404, detail="No run has completed yet")
    return run.to_json()
