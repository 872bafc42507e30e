"""
Authentication endpoints.

Signup and login are public and answer with a session token plus the
public projection of the user.  ``/me`` returns the full profile of the
token's owner, without the password hash.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from suvidhaa_api.app.api.deps import get_user_service, server_error
from suvidhaa_api.app.core.db import StoreError
from suvidhaa_api.app.core.exceptions import ServiceError
from suvidhaa_api.app.core.security import get_current_user
from suvidhaa_api.app.schemas.user import LoginRequest, SignupRequest
from suvidhaa_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    payload: Optional[SignupRequest] = None,
    users: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Register a customer account and sign it in."""
    try:
        result = await users.signup(payload or SignupRequest())
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StoreError as e:
        raise server_error(e)
    return {"message": "User registered successfully", **result}


@router.post("/login")
async def login(
    payload: Optional[LoginRequest] = None,
    users: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Exchange e-mail and password for a session token."""
    try:
        result = await users.login(payload or LoginRequest())
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StoreError as e:
        raise server_error(e)
    return {"message": "Login successful", **result}


@router.get("/me")
async def me(
    current_user: dict = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    try:
        return await users.get_user(current_user["user_id"])
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StoreError as e:
        raise server_error(e)
