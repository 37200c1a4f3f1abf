# content_analyst/workflow.py
from typing import Optional
from typing_extensions import TypedDict

from langgraph.graph import StateGraph, START, END

from content_analyst import config
from content_analyst.llm_client import chat_completion
from content_analyst.nodes.prompt_builder import build_analysis_prompt, build_digest_prompt
from content_analyst.nodes.score_extractor import extract_score
from content_analyst.nodes.search_agent import search_web

DIGEST_QUERY = "latest trends in digital marketing and technology for content creators"


# Shape of the analysis graph state (optional fields allowed)
class AnalysisState(TypedDict, total=False):
    title: str
    search_results: list
    prompt: str
    analysis: str
    score: Optional[int]


class DigestState(TypedDict, total=False):
    query: str
    search_results: list
    prompt: str
    insights: str


# --- Analysis nodes ---
# Each node runs only after the previous one returned; any exception stops the graph.
def node_search(state: AnalysisState) -> dict:
    return {"search_results": search_web(state["title"], count=config.SEARCH_RESULT_LIMIT)}


def node_build_prompt(state: AnalysisState) -> dict:
    return {"prompt": build_analysis_prompt(state["title"], state.get("search_results", []))}


def node_complete(state: AnalysisState) -> dict:
    return {"analysis": chat_completion(state["prompt"], temperature=config.ANALYSIS_TEMPERATURE)}


def node_extract_score(state: AnalysisState) -> dict:
    return {"score": extract_score(state["analysis"])}


# --- Digest nodes ---
def node_search_trends(state: DigestState) -> dict:
    return {"search_results": search_web(state["query"], count=config.SEARCH_RESULT_LIMIT)}


def node_build_digest_prompt(state: DigestState) -> dict:
    return {"prompt": build_digest_prompt(state.get("search_results", []))}


def node_complete_digest(state: DigestState) -> dict:
    html = chat_completion(state["prompt"], temperature=config.DIGEST_TEMPERATURE)
    return {"insights": html.strip()}


def build_analysis_graph():
    builder = StateGraph(AnalysisState)
    builder.add_node("search", node_search)
    builder.add_node("build_prompt", node_build_prompt)
    builder.add_node("complete", node_complete)
    builder.add_node("extract_score", node_extract_score)

    # strictly linear: completion needs the search context
    builder.add_edge(START, "search")
    builder.add_edge("search", "build_prompt")
    builder.add_edge("build_prompt", "complete")
    builder.add_edge("complete", "extract_score")
    builder.add_edge("extract_score", END)
    return builder.compile()


def build_digest_graph():
    builder = StateGraph(DigestState)
    builder.add_node("search_trends", node_search_trends)
    builder.add_node("build_digest_prompt", node_build_digest_prompt)
    builder.add_node("complete_digest", node_complete_digest)

    builder.add_edge(START, "search_trends")
    builder.add_edge("search_trends", "build_digest_prompt")
    builder.add_edge("build_digest_prompt", "complete_digest")
    builder.add_edge("complete_digest", END)
    return builder.compile()


analysis_graph = build_analysis_graph()
digest_graph = build_digest_graph()


def run_analysis(title: str) -> dict:
    """Run search -> prompt -> completion -> score for one idea title. Returns the final graph state."""
    return analysis_graph.invoke({"title": title})


def run_digest() -> dict:
    return digest_graph.invoke({"query": DIGEST_QUERY})
