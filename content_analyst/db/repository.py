# content_analyst/db/repository.py
"""
Row-level persistence for content ideas and daily insights.

Status writes are conditional on the row's current analysis_status so that a
row can only move forward: pending -> analyzing -> completed | failed.
"""
import functools
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from content_analyst.db.mongo import get_collection
from content_analyst.errors import NotFound, PersistenceError, StateTransitionError
from content_analyst.schemas import OPEN_STATUSES, AnalysisStatus, ProjectStatus

logger = logging.getLogger("workflow")

IDEAS = "content_ideas"
INSIGHTS = "daily_insights"
COUNTERS = "counters"

_NO_ID = {"_id": 0}


def _timestamp(dt: Optional[datetime] = None) -> str:
    # fixed width so that string comparison matches time order
    dt = dt or datetime.now(timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f+00:00")


def _persistence(fn):
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except PyMongoError as e:
            logger.error(f"{fn.__name__} failed: {e}")
            raise PersistenceError(f"{fn.__name__} failed: {e}") from e
    return wrapper


def _next_id(sequence: str) -> int:
    counter = get_collection(COUNTERS).find_one_and_update(
        {"_id": sequence},
        {"$inc": {"seq": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return int(counter["seq"])


# ---------------------------------------------------------
# Ideas
# ---------------------------------------------------------
@_persistence
def create_idea(
    title: str,
    user_id: str,
    description: Optional[str] = None,
    raw_content: Optional[str] = None,
    analysis_status: str = AnalysisStatus.PENDING.value,
    project_status: str = ProjectStatus.NEW.value,
) -> dict:
    now = _timestamp()
    doc = {
        "id": _next_id(IDEAS),
        "title": title,
        "description": description,
        "raw_content": raw_content,
        "analysis_status": analysis_status,
        "project_status": project_status,
        "score": None,
        "analysis": None,
        "user_id": user_id,
        "created_at": now,
        "updated_at": now,
    }
    get_collection(IDEAS).insert_one(dict(doc))
    return doc


@_persistence
def get_idea(idea_id: int) -> Optional[dict]:
    return get_collection(IDEAS).find_one({"id": idea_id}, _NO_ID)


@_persistence
def list_ideas(limit: int = 100) -> list:
    cursor = get_collection(IDEAS).find({}, _NO_ID).sort([("created_at", DESCENDING), ("id", DESCENDING)]).limit(limit)
    return list(cursor)


@_persistence
def mark_analyzing(idea_id: int) -> dict:
    """Set analysis_status=analyzing and return the updated row.

    Raises NotFound for an unknown id and StateTransitionError when the row
    has already reached a terminal status.
    """
    result = get_collection(IDEAS).update_one(
        {"id": idea_id, "analysis_status": {"$in": OPEN_STATUSES}},
        {"$set": {"analysis_status": AnalysisStatus.ANALYZING.value, "updated_at": _timestamp()}},
    )
    existing = get_idea(idea_id)
    if result.matched_count:
        return existing

    if existing is None:
        raise NotFound(f"Idea with ID {idea_id} not found")
    raise StateTransitionError(
        f"Idea {idea_id} is already {existing['analysis_status']}; submit a new idea to re-analyze"
    )


@_persistence
def complete_idea(idea_id: int, score: Optional[int], analysis: str) -> Optional[dict]:
    """Mark an analyzing row completed. Returns the row, or None if it was not analyzing."""
    result = get_collection(IDEAS).update_one(
        {"id": idea_id, "analysis_status": AnalysisStatus.ANALYZING.value},
        {"$set": {
            "analysis_status": AnalysisStatus.COMPLETED.value,
            "score": score,
            "analysis": analysis,
            "updated_at": _timestamp(),
        }},
    )
    if not result.matched_count:
        return None
    return get_idea(idea_id)


@_persistence
def fail_idea(idea_id: int) -> bool:
    """Mark an analyzing row as failed. score and analysis are left unset."""
    result = get_collection(IDEAS).update_one(
        {"id": idea_id, "analysis_status": AnalysisStatus.ANALYZING.value},
        {"$set": {"analysis_status": AnalysisStatus.FAILED.value, "updated_at": _timestamp()}},
    )
    return result.modified_count > 0


@_persistence
def update_project_status(idea_id: int, project_status: str) -> dict:
    result = get_collection(IDEAS).update_one(
        {"id": idea_id},
        {"$set": {"project_status": project_status, "updated_at": _timestamp()}},
    )
    if not result.matched_count:
        raise NotFound(f"Idea with ID {idea_id} not found")
    return get_idea(idea_id)


@_persistence
def reap_stale_analyses(older_than_minutes: int) -> int:
    """Fail rows stuck in analyzing whose last update is older than the threshold."""
    cutoff = _timestamp(datetime.now(timezone.utc) - timedelta(minutes=older_than_minutes))
    result = get_collection(IDEAS).update_many(
        {"analysis_status": AnalysisStatus.ANALYZING.value, "updated_at": {"$lt": cutoff}},
        {"$set": {"analysis_status": AnalysisStatus.FAILED.value, "updated_at": _timestamp()}},
    )
    if result.modified_count:
        logger.warning(f"Marked {result.modified_count} stale analyses as failed")
    return result.modified_count


# ---------------------------------------------------------
# Daily insights
# ---------------------------------------------------------
@_persistence
def insert_daily_insight(content: str) -> dict:
    doc = {"id": _next_id(INSIGHTS), "content": content, "created_at": _timestamp()}
    get_collection(INSIGHTS).insert_one(dict(doc))
    return doc


@_persistence
def latest_daily_insight() -> Optional[dict]:
    rows = list(get_collection(INSIGHTS).find({}, _NO_ID).sort([("created_at", DESCENDING), ("id", DESCENDING)]).limit(1))
    return rows[0] if rows else None
