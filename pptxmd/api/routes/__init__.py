"""API routes for pptxmd."""

from fastapi import APIRouter

from pptxmd.api.routes.convert import router as convert_router

# Main API router
api_router = APIRouter()

api_router.include_router(convert_router, tags=["Conversion"])

__all__ = ["api_router"]
