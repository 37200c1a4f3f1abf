# content_analyst/main.py
import logging
from collections import deque
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Body, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from content_analyst import config
from content_analyst.auth import principal_from_header
from content_analyst.db import repository
from content_analyst.dispatcher import AnalysisDispatcher, StaleAnalysisReaper
from content_analyst.errors import NotFound, Unauthorized, ValidationError
from content_analyst.intake import submit_idea
from content_analyst.nodes.daily_insights import generate_daily_insights, latest_daily_insight
from content_analyst.orchestrator import analyze_idea
from content_analyst.schemas import AnalyzeRequest, ProjectStatusUpdate

# ---------------------------------------------------------
# Initialize Logging for Log Capture (/logs)
# ---------------------------------------------------------
class RecentLogHandler(logging.Handler):
    """Keeps only the most recent formatted records so /logs stays bounded."""

    def __init__(self, capacity: int):
        super().__init__()
        self.lines = deque(maxlen=capacity)

    def emit(self, record):
        try:
            self.lines.append(self.format(record))
        except Exception:
            self.handleError(record)

    def getvalue(self) -> str:
        return "".join(f"{line}\n" for line in list(self.lines))


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("workflow")
logger.setLevel(logging.INFO)

# Remove existing handlers so logs don't duplicate
for h in list(logger.handlers):
    logger.removeHandler(h)

log_buffer = RecentLogHandler(config.LOG_BUFFER_LINES)
log_buffer.setLevel(logging.INFO)
logger.addHandler(log_buffer)

# ---------------------------------------------------------

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, PATCH, OPTIONS",
}

dispatcher = AnalysisDispatcher()
reaper = StaleAnalysisReaper()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.REAPER_ENABLED:
        reaper.start()
    yield
    reaper.stop()
    dispatcher.shutdown(wait=False)


app = FastAPI(title="Content Idea Analyst", lifespan=lifespan)


@app.middleware("http")
async def cors(request: Request, call_next):
    # preflight: 200 with no body
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError):
    # the analysis trigger reports every failure as 500
    status_code = 500 if request.url.path == "/analyze" else 400
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


def _error(status_code: int, e: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(e)})


# ---------------------------------------------------------
# Logs Endpoint
# ---------------------------------------------------------
@app.get("/logs")
def fetch_logs():
    """Return accumulated pipeline logs."""
    return {"logs": log_buffer.getvalue()}


# ---------------------------------------------------------
# Analysis Trigger
# ---------------------------------------------------------
@app.post("/analyze")
def analyze(payload: Any = Body(...)):
    """
    Run the analysis for an existing idea and wait for it to finish.
    Any failure is reported as 500; the row itself is marked failed by the orchestrator.
    """
    idea_id = payload.get("idea_id") if isinstance(payload, dict) else None
    try:
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        if idea_id is None:
            raise ValidationError("Missing required field: idea_id")
        request = AnalyzeRequest(idea_id=idea_id)
        analyze_idea(request.idea_id)
        return {"success": True, "idea_id": request.idea_id}
    except Exception as e:
        logger.error(f"Analysis failed for idea ID: {idea_id}. Error: {e}")
        return _error(500, e)


# ---------------------------------------------------------
# Submit Idea
# ---------------------------------------------------------
@app.post("/ideas")
def create_idea(payload: dict = Body(...), authorization: Optional[str] = Header(None)):
    try:
        principal = None
        if isinstance(payload, dict) and payload.get("title"):
            principal = principal_from_header(authorization)
        idea = submit_idea(payload, principal, dispatcher)
        return JSONResponse(status_code=201, content=idea)
    except Exception as e:
        logger.error(f"Error in create_idea: {e}")
        return _error(400, e)


# ---------------------------------------------------------
# Team Views
# ---------------------------------------------------------
@app.get("/ideas")
def list_ideas(limit: int = 100):
    try:
        return repository.list_ideas(limit=limit)
    except Exception as e:
        logger.error(f"Error in list_ideas: {e}")
        return _error(500, e)


@app.get("/ideas/{idea_id}")
def get_idea(idea_id: int):
    try:
        idea = repository.get_idea(idea_id)
    except Exception as e:
        logger.error(f"Error in get_idea: {e}")
        return _error(500, e)
    if idea is None:
        return _error(404, NotFound(f"Idea with ID {idea_id} not found"))
    return idea


@app.patch("/ideas/{idea_id}/project_status")
def update_project_status(
    idea_id: int,
    payload: dict = Body(...),
    authorization: Optional[str] = Header(None),
):
    try:
        principal_from_header(authorization)
        try:
            update = ProjectStatusUpdate(**payload)
        except ValueError as e:
            raise ValidationError(f"Invalid project_status: {payload.get('project_status')!r}") from e
        return repository.update_project_status(idea_id, update.project_status.value)
    except Unauthorized as e:
        return _error(401, e)
    except ValidationError as e:
        return _error(400, e)
    except NotFound as e:
        return _error(404, e)
    except Exception as e:
        logger.error(f"Error in update_project_status: {e}")
        return _error(500, e)


# ---------------------------------------------------------
# Daily Insights
# ---------------------------------------------------------
@app.post("/daily-insights")
def create_daily_insights():
    try:
        row = generate_daily_insights()
        return {"success": True, "insights": row["content"]}
    except Exception as e:
        logger.error(f"Error generating daily insights: {e}")
        return _error(500, e)


@app.get("/daily-insights/latest")
def get_latest_daily_insight():
    try:
        row = latest_daily_insight()
    except Exception as e:
        logger.error(f"Error in get_latest_daily_insight: {e}")
        return _error(500, e)
    if row is None:
        return _error(404, NotFound("No daily insights yet"))
    return row


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
