"""
Health check endpoint.
"""
from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    return {"status": "ok", "environment": request.app.state.environment}
