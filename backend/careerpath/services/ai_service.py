"""AI drafting: roadmap step generation and the roadmap helper."""

from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.ai.llm import get_helper_llm, get_steps_llm
from careerpath.ai.llm_utils import parse_llm_json_response
from careerpath.core.exceptions import UpstreamServiceError
from careerpath.core.logging import get_logger
from careerpath.schemas.roadmap import RoadmapStep
from careerpath.services.roadmap_service import get_roadmap_or_404, parse_steps

logger = get_logger(__name__)


# ============================================================================
# Prompts
# ============================================================================

STEPS_SYSTEM_PROMPT = """
You design practical, beginner-friendly career roadmaps for university students.

Return ONLY a JSON array of 2-3 steps. Each step is an object with:
- "title": a clear step title (e.g. "Learn HTML")
- "bullets": 2-3 concise bullet points with key actions or concepts
- "link": optional URL of a reputable learning resource

Example:
[
  {"title": "Learn HTML", "bullets": ["Understand tags", "Create a webpage"],
   "link": "https://developer.mozilla.org/en-US/docs/Web/HTML"},
  {"title": "Learn CSS", "bullets": ["Style elements", "Use Flexbox"]}
]
"""

HELPER_SYSTEM_PROMPT = """
You help students who follow a specific roadmap. Give concise, neutral,
beginner-friendly answers grounded in the roadmap's steps.

Return ONLY a JSON object of the form {"answer": "..."}.
"""


def _steps_prompt(title: str, year: int | None) -> str:
    audience = f"a year {year} student" if year else "a student of any year"
    return f'Generate a roadmap for "{title}" suitable for {audience}.'


def _roadmap_context(title: str, year: int | None, steps: list[RoadmapStep]) -> str:
    lines = [f"Roadmap Title: {title}", f"Year: {year or 'General'}", "Steps:"]
    for i, step in enumerate(steps, start=1):
        lines.append(f"{i}. {step.title}")
        lines.append(f"  - Bullets: {', '.join(step.bullets)}")
        lines.append(f"  - Link: {step.link or 'None'}")
    return "\n".join(lines)


# ============================================================================
# Step Generation
# ============================================================================


def clean_generated_steps(raw_steps: list) -> list[RoadmapStep]:
    """Keep usable steps from a model reply.

    Steps without a title or bullets are dropped; blank bullets are removed
    and unusable links are discarded rather than failing the whole step.
    """
    steps: list[RoadmapStep] = []
    for raw in raw_steps:
        if not isinstance(raw, dict):
            continue
        title = str(raw.get("title") or "").strip()
        bullets = [str(b).strip() for b in raw.get("bullets") or [] if str(b).strip()]
        if not title or not bullets:
            continue

        link = raw.get("link") or None
        try:
            steps.append(RoadmapStep(title=title, bullets=bullets, link=link))
        except ValidationError:
            steps.append(RoadmapStep(title=title, bullets=bullets))
    return steps


async def generate_steps(title: str, year: int | None = None) -> list[RoadmapStep]:
    """Draft roadmap steps with the language model.

    Raises:
        UpstreamServiceError: Model call failed or returned no usable steps
    """
    llm = get_steps_llm()
    try:
        response = await llm.ainvoke(
            [
                SystemMessage(content=STEPS_SYSTEM_PROMPT),
                HumanMessage(content=_steps_prompt(title, year)),
            ]
        )
        raw_steps = parse_llm_json_response(response.content, expected=list)
    except Exception as e:
        logger.error("Roadmap step generation failed", title=title, error=str(e))
        raise UpstreamServiceError("Failed to generate roadmap steps") from e

    steps = clean_generated_steps(raw_steps)
    if not steps:
        logger.error("Model returned no valid steps", title=title)
        raise UpstreamServiceError("Failed to generate roadmap steps")

    logger.info("Roadmap steps generated", title=title, step_count=len(steps))
    return steps


# ============================================================================
# Roadmap Helper
# ============================================================================


async def answer_question(db: AsyncSession, roadmap_id: int, query: str) -> str:
    """Answer a question about a roadmap.

    Raises:
        NotFoundError: Roadmap does not exist
        UpstreamServiceError: Model call failed or returned no answer
    """
    roadmap = await get_roadmap_or_404(db, roadmap_id)
    context = _roadmap_context(roadmap.title, roadmap.year, parse_steps(roadmap.steps, roadmap_id=roadmap.id))

    llm = get_helper_llm()
    try:
        response = await llm.ainvoke(
            [
                SystemMessage(content=HELPER_SYSTEM_PROMPT),
                HumanMessage(content=f"Roadmap Context:\n{context}\n\nUser Query: {query}"),
            ]
        )
        payload = parse_llm_json_response(response.content, expected=dict)
    except Exception as e:
        logger.error("Roadmap helper failed", roadmap_id=roadmap_id, error=str(e))
        raise UpstreamServiceError("Failed to answer roadmap question") from e

    answer = payload.get("answer")
    if not isinstance(answer, str) or not answer.strip():
        logger.error("Model returned no answer", roadmap_id=roadmap_id)
        raise UpstreamServiceError("Failed to answer roadmap question")

    return answer.strip()
