# content_analyst/nodes/score_extractor.py
import re
from typing import Optional

# The final score marker the analysis blueprint asks the model to fill in
SCORE_MARKER_RE = re.compile(r'<strong style="font-size: 1\.2em; color: #FF7A59;">(\d{1,3})/100</strong>')

MIN_SCORE = 0
MAX_SCORE = 100


def extract_score(html) -> Optional[int]:
    """Return the overall score from the report markup, or None when the marker is missing or out of range."""
    if not isinstance(html, str):
        return None
    m = SCORE_MARKER_RE.search(html)
    if not m:
        return None
    score = int(m.group(1))
    if score < MIN_SCORE or score > MAX_SCORE:
        return None
    return score
