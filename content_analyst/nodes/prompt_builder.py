# content_analyst/nodes/prompt_builder.py
import json
import re

from content_analyst.nodes.prompt_blueprint import ANALYSIS_BLUEPRINT

_SLOT_RE = re.compile(r"\{\{([A-Z_]+)\}\}")

ORGANIZATION_CONTEXT = (
    "- Our Mission: Help millions of organizations grow better.\n"
    "- Our Target Audience: We primarily serve marketing, sales, customer service, and operations "
    "professionals in B2B companies, from startups to large enterprises. We also have a large audience "
    "of developers and people in the startup ecosystem.\n"
    "- Core Topics: Our content revolves around inbound marketing, sales strategy, customer experience, "
    "CRM, marketing automation, AI in business, and scaling a business.\n"
    "- Content Goal: We create content to educate, inspire, and provide actionable advice that helps our "
    "audience solve their problems. Our content should build trust and subtly guide them toward our "
    "products. An idea about \"raising a puppy\" is not a good fit unless it's a clever analogy for a "
    "business problem. An idea about \"blockchain for B2B marketing\" is a much better fit."
)

ANALYSIS_PROMPT_TEMPLATE = (
    "You are an expert content strategist and media analyst for HubSpot. Your task is to fill out the "
    "following HTML template based on the provided content idea and web search context.\n\n"
    "CRITICAL CONSTRAINTS (Non-Negotiable):\n"
    "- You MUST respond with properly formatted HTML content.\n"
    "- Return ONLY HTML content - no JSON wrapper, no markdown, no explanatory text.\n"
    "- Security: Do not include <script>, <style>, <iframe>, <object>, <embed>, <form>, or <input> tags. "
    "No event handlers (onclick, etc.). No \"javascript:\" or \"data:\" URLs.\n"
    "- All quotes and special characters in the content you generate must be properly escaped within the HTML.\n"
    "- Use the provided HTML structure and inline styles. Do not invent new styles or tags.\n\n"
    "---\n"
    "HUBSPOT CONTEXT (Your Guiding Principles):\n"
    "{{ORGANIZATION_CONTEXT}}\n"
    "---\n\n"
    "---\n"
    "YOUR ANALYSIS PROCESS (Follow these steps):\n"
    "1. Deeply analyze the Idea Context (title and search results) through the lens of the HubSpot Context "
    "provided above.\n"
    "2. Fill out sections 1-5 of the HTML template with detailed, specific, and actionable insights.\n"
    "3. Critically evaluate the idea against the criteria in the \"Scoring Rationale & Breakdown\" table "
    "(Section 6).\n"
    "4. For each criterion, provide a score from 1-10 and a brief justification. The justification is as "
    "important as the score.\n"
    "5. Calculate the final weighted score: (Audience Fit Score * 0.3) + (Business Alignment & SEO Score * 0.3) "
    "+ (Originality Score * 0.2) + (Virality Score * 0.2). The result is a score out of 10. Multiply by 10 to "
    "get the score out of 100.\n"
    "6. Place the final calculated score in the \"Overall Score\" field (Section 7). Ensure the rationale in "
    "Section 6 clearly supports this final score.\n"
    "---\n\n"
    "---\n"
    "IDEA CONTEXT\n"
    "Title: {{IDEA_TITLE}}\n"
    "Web Search Results: {{SEARCH_CONTEXT}}\n"
    "---\n\n"
    "HTML TEMPLATE TO COMPLETE:\n"
    "{{ANALYSIS_BLUEPRINT}}\n"
)

DIGEST_PROMPT_TEMPLATE = (
    "You are a senior market analyst at a leading tech company.\n"
    "Based on the following web search results about the latest trends in digital marketing and technology, "
    "generate a concise, bulleted list of 3-4 key insights for a team of content creators at HubSpot.\n\n"
    "CRITICAL CONSTRAINTS (Non-Negotiable):\n"
    "- Respond with properly formatted HTML content ONLY. No JSON, no markdown, no explanatory text outside the HTML.\n"
    "- Your entire response must be wrapped in a single parent <ul> element.\n"
    "- Each insight must be in its own <li> element.\n"
    "- Keep each bullet point to a maximum of 2-3 sentences.\n"
    "- The tone should be professional, insightful, and actionable.\n\n"
    "WEB SEARCH CONTEXT:\n"
    "{{SEARCH_CONTEXT}}\n\n"
    "EXAMPLE OUTPUT:\n"
    "<ul><li><strong>AI-Powered Content Personalization:</strong> AI is no longer just a buzzword. Generative AI "
    "tools are enabling hyper-personalized content at scale, allowing brands to tailor messaging to individual "
    "user behavior and preferences, leading to higher engagement.</li><li><strong>The Rise of Short-Form "
    "Video:</strong> Platforms like TikTok, Instagram Reels, and YouTube Shorts dominate user attention. Brands "
    "must create engaging, concise video content to stay relevant and capture new audiences.</li></ul>\n"
)


def render(template: str, values: dict) -> str:
    """
    Substitute {{NAME}} slots in a single pass. Inserted values are not
    scanned again, and slots without a value are left as they are.
    """
    def _sub(match):
        name = match.group(1)
        if name in values:
            return values[name]
        return match.group(0)

    return _SLOT_RE.sub(_sub, template)


def serialize_results(results: list, fields=("title", "url", "snippet")) -> str:
    rows = [{f: r.get(f, "") for f in fields} for r in results]
    return json.dumps(rows, indent=2, ensure_ascii=False)


def build_analysis_prompt(title: str, search_results: list) -> str:
    blueprint = render(ANALYSIS_BLUEPRINT, {"IDEA_TITLE": title})
    return render(ANALYSIS_PROMPT_TEMPLATE, {
        "ORGANIZATION_CONTEXT": ORGANIZATION_CONTEXT,
        "IDEA_TITLE": title,
        "SEARCH_CONTEXT": serialize_results(search_results),
        "ANALYSIS_BLUEPRINT": blueprint,
    })


def build_digest_prompt(search_results: list) -> str:
    return render(DIGEST_PROMPT_TEMPLATE, {
        "SEARCH_CONTEXT": serialize_results(search_results, fields=("title", "snippet")),
    })
