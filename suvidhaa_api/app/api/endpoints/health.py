"""
Health check endpoint, mounted at ``/api``.
"""

from fastapi import APIRouter

router = APIRouter()


@router.get("")
async def health() -> dict:
    return {"message": "Suvidhaa API is running successfully!"}
