# content_analyst/llm_client.py
import logging
import re
import requests

from content_analyst import config
from content_analyst.errors import UpstreamUnavailable

logger = logging.getLogger("workflow")

EMPTY_REPORT = "<html><body>Error generating report.</body></html>"

# Markdown fence the model sometimes wraps its HTML in
_fence_open_re = re.compile(r"^\s*```[a-zA-Z]*[ \t]*\n?")
_fence_close_re = re.compile(r"\n?```\s*$")


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```html ... ``` wrapper. Text without a fence is returned unchanged."""
    if not _fence_open_re.match(text):
        return text
    text = _fence_open_re.sub("", text, count=1)
    return _fence_close_re.sub("", text, count=1)


def raw_model_call(prompt: str, temperature: float, model: str = None) -> str:
    """Return the content of the single top completion choice. Raise UpstreamUnavailable if the call fails."""
    url = f"{config.OPENAI_BASE_URL.rstrip('/')}/chat/completions"
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {config.OPENAI_API_KEY}",
    }
    payload = {
        "model": model or config.OPENAI_MODEL,
        "messages": [{"role": "user", "content": prompt}],
        "temperature": temperature,
        "n": 1,
    }

    try:
        resp = requests.post(url, headers=headers, json=payload, timeout=config.UPSTREAM_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        logger.error(f"Completion request failed: {e}")
        raise UpstreamUnavailable(f"Completion request failed: {e}") from e

    if not resp.ok:
        logger.error(f"Completion API error. Status: {resp.status_code} {resp.text[:500]}")
        raise UpstreamUnavailable(
            f"Completion request failed with status: {resp.status_code}: {resp.text}",
            status_code=resp.status_code,
            body=resp.text,
        )

    try:
        data = resp.json()
        content = data["choices"][0]["message"].get("content")
    except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
        raise UpstreamUnavailable(
            f"Unexpected completion response shape: {e}", status_code=resp.status_code, body=resp.text
        ) from e

    return content or ""


def chat_completion(prompt: str, temperature: float, model: str = None) -> str:
    raw = raw_model_call(prompt, temperature, model=model)
    if not raw:
        logger.warning("Completion returned empty content")
        return EMPTY_REPORT
    return strip_code_fence(raw)
