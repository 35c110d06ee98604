"""Role dashboards served under the gated /student, /alumni and /admin prefixes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import func, select

from careerpath.api.deps import DBSession
from careerpath.core.auth import RequestContext, Role, require_role
from careerpath.models import Roadmap, RoadmapProgress, SuccessStory
from careerpath.services import roadmap_service

router = APIRouter(tags=["dashboards"])

StudentViewer = Annotated[RequestContext, Depends(require_role(Role.STUDENT))]
AlumniViewer = Annotated[RequestContext, Depends(require_role(Role.ALUMNI))]
AdminViewer = Annotated[RequestContext, Depends(require_role(Role.ADMIN))]


@router.get("/student/dashboard")
async def student_dashboard(db: DBSession, ctx: StudentViewer) -> dict:
    """Roadmaps with the student's progress and a summary of it."""
    roadmaps = await roadmap_service.list_roadmaps(db, user_id=ctx.user_id)

    started = [r for r in roadmaps if r.progress and r.progress.completed_steps]
    # Step indices have no upper bound, so compare against the actual steps
    completed = [
        r for r in started if r.steps and set(range(len(r.steps))) <= set(r.progress.completed_steps)
    ]
    return {
        "data": [r.model_dump(mode="json") for r in roadmaps],
        "summary": {
            "liked": sum(1 for r in roadmaps if r.progress and r.progress.liked),
            "started": len(started),
            "completed": len(completed),
        },
    }


@router.get("/alumni/dashboard")
async def alumni_dashboard(db: DBSession, ctx: AlumniViewer) -> dict:
    """Roadmaps published by the alumni user."""
    roadmaps = await roadmap_service.list_roadmaps(db, created_by=ctx.user_id)
    return {
        "data": [r.model_dump(mode="json") for r in roadmaps],
        "summary": {
            "roadmaps": len(roadmaps),
            "likes": sum(r.likes for r in roadmaps),
        },
    }


@router.get("/admin/dashboard")
async def admin_dashboard(db: DBSession, ctx: AdminViewer) -> dict:
    """Platform-wide totals."""
    counts = {}
    for label, model in (
        ("roadmaps", Roadmap),
        ("success_stories", SuccessStory),
        ("progress_records", RoadmapProgress),
    ):
        counts[label] = await db.scalar(select(func.count()).select_from(model)) or 0
    return {"summary": counts}
