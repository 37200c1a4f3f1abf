# content_analyst/intake.py
import logging
from typing import Optional

from pydantic import ValidationError as SchemaValidationError

from content_analyst.db import repository
from content_analyst.errors import Unauthorized, ValidationError
from content_analyst.schemas import AnalysisStatus, ProjectStatus, SubmitIdeaRequest

logger = logging.getLogger("workflow")


def parse_submission(payload) -> SubmitIdeaRequest:
    if not isinstance(payload, dict) or not payload.get("title"):
        raise ValidationError("Missing required field: title")
    try:
        return SubmitIdeaRequest(**payload)
    except SchemaValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or "payload"
        raise ValidationError(f"Invalid field {field}: {first.get('msg')}") from e


def submit_idea(payload, principal: Optional[str], dispatcher) -> dict:
    """
    Validate and persist a new idea, then hand it to the dispatcher without
    waiting. The row is created directly in `analyzing` since the work is
    already queued. Returns the created row.
    """
    request = parse_submission(payload)
    if not principal:
        raise Unauthorized("User not found")

    idea = repository.create_idea(
        title=request.title,
        user_id=principal,
        description=request.description,
        raw_content=request.raw_content,
        analysis_status=AnalysisStatus.ANALYZING.value,
        project_status=ProjectStatus.NEW.value,
    )
    logger.info(f"Created idea {idea['id']} for user {principal}")

    # a dispatch that fails to start does not fail the submission
    try:
        if not dispatcher.submit(idea["id"]):
            logger.error(f"Error invoking analysis for idea {idea['id']}: dispatcher rejected the job")
    except Exception as e:
        logger.error(f"Caught unexpected error when invoking analysis for idea {idea['id']}: {e}")

    return idea
