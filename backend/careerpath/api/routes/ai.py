"""AI drafting routes."""

from fastapi import APIRouter

from careerpath.api.deps import AlumniContext, CurrentContext, DBSession
from careerpath.schemas.ai import HelperRequest, HelperResponse, StepsDraftRequest, StepsDraftResponse
from careerpath.services import ai_service

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/roadmap-steps", response_model=StepsDraftResponse)
async def draft_roadmap_steps(data: StepsDraftRequest, ctx: AlumniContext) -> dict:
    """Draft steps for a new roadmap."""
    steps = await ai_service.generate_steps(data.title, data.year)
    return {"data": steps}


@router.post("/roadmap-helper", response_model=HelperResponse)
async def roadmap_helper(data: HelperRequest, db: DBSession, ctx: CurrentContext) -> dict:
    """Answer a question about a roadmap."""
    answer = await ai_service.answer_question(db, data.roadmap_id, data.query)
    return {"data": {"answer": answer}}
