"""Primary API router definition."""

from fastapi import APIRouter

from . import classes, imports, links, students

api_router = APIRouter()

# Static paths are registered before "/students/{student_id}".
api_router.include_router(links.router)
api_router.include_router(imports.router)
api_router.include_router(students.router)
api_router.include_router(classes.router)


@api_router.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "ok"}
