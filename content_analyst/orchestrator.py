# content_analyst/orchestrator.py
"""
Analysis state machine for a single idea.

    received -> analyzing -> completed | failed

One attempt per idea: upstream failures are not retried, the row is marked
failed and a new submission is the only way to try again.
"""
import logging

from content_analyst import workflow
from content_analyst.db import repository
from content_analyst.errors import StateTransitionError

logger = logging.getLogger("workflow")


def analyze_idea(idea_id: int) -> dict:
    """Run the full analysis for `idea_id` and return the final row."""
    logger.info(f"=== Starting analysis for idea ID: {idea_id} ===")

    # received -> analyzing; NotFound / StateTransitionError leave the row untouched
    idea = repository.mark_analyzing(idea_id)

    try:
        result = workflow.run_analysis(idea["title"])
        score = result.get("score")
        if score is None:
            logger.warning(f"No score marker found in analysis for idea ID: {idea_id}")

        row = repository.complete_idea(idea_id, score, result["analysis"])
        if row is None:
            raise StateTransitionError(f"Idea {idea_id} left the analyzing state during analysis")
    except Exception as e:
        logger.error(f"Analysis failed for idea ID: {idea_id}. Error: {e}")
        _mark_failed(idea_id)
        raise

    logger.info(f"Successfully completed analysis for idea ID: {idea_id} (score={score})")
    return row


def _mark_failed(idea_id: int) -> None:
    # Best effort; a failure here leaves the row in analyzing for the reaper
    try:
        repository.fail_idea(idea_id)
    except Exception as e:
        logger.error(f"Could not mark idea ID {idea_id} as failed: {e}")
