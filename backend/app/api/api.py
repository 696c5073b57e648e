"""
API Router Aggregator.

Combines all v1 API routers into a single router for the main app.
"""

from fastapi import APIRouter

from app.api.v1 import (
    applications,
    auth,
    connection_requests,
    job_categories,
    jobs,
    notifications,
    recruiters,
    users,
    work_assignments,
    workers,
)

api_router = APIRouter()

# Include all v1 routers with their prefixes and tags
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"],
)

api_router.include_router(
    workers.router,
    prefix="/workers",
    tags=["Workers"],
)

api_router.include_router(
    recruiters.router,
    prefix="/recruiters",
    tags=["Recruiters"],
)

api_router.include_router(
    job_categories.router,
    prefix="/job-categories",
    tags=["Job Categories"],
)

api_router.include_router(
    jobs.router,
    prefix="/jobs",
    tags=["Jobs"],
)

api_router.include_router(
    applications.router,
    prefix="/applications",
    tags=["Applications"],
)

api_router.include_router(
    work_assignments.router,
    prefix="/work-assignments",
    tags=["Work Assignments"],
)

api_router.include_router(
    connection_requests.router,
    prefix="/connection-requests",
    tags=["Connection Requests"],
)

api_router.include_router(
    notifications.router,
    prefix="/notifications",
    tags=["Notifications"],
)
