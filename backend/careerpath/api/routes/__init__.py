"""API routes."""

from careerpath.api.routes import ai, dashboards, roadmaps, success_stories, users

__all__ = ["ai", "dashboards", "roadmaps", "success_stories", "users"]
