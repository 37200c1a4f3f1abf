# content_analyst/nodes/search_agent.py
import logging
import requests

from content_analyst import config
from content_analyst.errors import UpstreamUnavailable

logger = logging.getLogger("workflow")


def _normalize(item: dict) -> dict:
    return {
        "title": item.get("title") or "",
        "url": item.get("url") or "",
        "snippet": item.get("description") or "",
    }


def search_web(query: str, count: int = None) -> list:
    """
    Call the Brave web search endpoint (GET). Returns up to `count` results as
    a list of {title, url, snippet} in provider order.
    Zero results is an empty list; any transport or status failure raises
    UpstreamUnavailable. There are no retries.
    """
    count = count or config.SEARCH_RESULT_LIMIT
    headers = {
        "X-Subscription-Token": config.BRAVE_API_KEY,
        "Accept": "application/json",
    }
    params = {"q": query, "count": count}

    try:
        resp = requests.get(
            config.BRAVE_SEARCH_URL,
            headers=headers,
            params=params,
            timeout=config.UPSTREAM_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        logger.error(f"Brave search request failed for '{query}': {e}")
        raise UpstreamUnavailable(f"Search request failed: {e}") from e

    if not resp.ok:
        logger.error(f"Brave search error. Status: {resp.status_code} {resp.text[:500]}")
        raise UpstreamUnavailable(
            f"Search request failed with status: {resp.status_code}",
            status_code=resp.status_code,
            body=resp.text,
        )

    try:
        data = resp.json()
    except ValueError as e:
        raise UpstreamUnavailable("Search response was not valid JSON", status_code=resp.status_code) from e

    web = data.get("web") if isinstance(data, dict) else None
    results = (web or {}).get("results") or []
    snippets = [_normalize(item) for item in results[:count] if isinstance(item, dict)]
    logger.info(f"Brave search context retrieved. {len(snippets)} results.")
    return snippets
