# content_analyst/nodes/daily_insights.py
from content_analyst import workflow
from content_analyst.db import repository
import logging

logger = logging.getLogger("workflow")


def generate_daily_insights() -> dict:
    """Search current trends, summarise them as an HTML <ul> and store a new daily_insights row."""
    logger.info("Fetching trending topics for daily insights…")
    result = workflow.run_digest()
    row = repository.insert_daily_insight(result["insights"])
    logger.info(f"Saved daily insights row {row['id']}")
    return row


def latest_daily_insight():
    return repository.latest_daily_insight()
