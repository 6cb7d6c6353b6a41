"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobboard.schemas.schemas import ErrorResponse

from jobboard.api.routes.auth_routes import router as auth_router
from jobboard.api.routes.profile_routes import router as profile_router
from jobboard.api.routes.company_routes import router as company_router
from jobboard.api.routes.job_routes import router as job_router

# Main API router; every error body is {"error": message}
api_router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        401: {"model": ErrorResponse, "description": "Missing or invalid credentials"},
        404: {"model": ErrorResponse, "description": "Not found"},
    }
)

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(company_router)
api_router.include_router(job_router)
