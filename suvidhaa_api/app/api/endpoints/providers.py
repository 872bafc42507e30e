"""
Provider directory endpoints.

Listing and viewing providers is public.  Registering as a provider
requires a signed-in user; because the role is part of the session token,
the response includes a fresh token that carries the ``provider`` role.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from suvidhaa_api.app.api.deps import get_provider_service, server_error
from suvidhaa_api.app.core.db import StoreError
from suvidhaa_api.app.core.exceptions import ServiceError
from suvidhaa_api.app.core.policy import PROVIDER
from suvidhaa_api.app.core.security import get_current_user, issue_token
from suvidhaa_api.app.schemas.provider import ProviderRegister
from suvidhaa_api.app.services.provider_service import ProviderService

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_provider(
    payload: Optional[ProviderRegister] = None,
    current_user: dict = Depends(get_current_user),
    providers: ProviderService = Depends(get_provider_service),
) -> Dict[str, Any]:
    try:
        provider = await providers.register(current_user["user_id"], payload or ProviderRegister())
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StoreError as e:
        raise server_error(e)
    return {
        "message": "Provider registration successful",
        "provider": provider,
        "token": issue_token(current_user["user_id"], PROVIDER),
    }


@router.get("")
async def list_providers(
    service: Optional[str] = Query(None, description="Exact service name"),
    location: Optional[str] = Query(None, description="Part of the location, case-insensitive"),
    providers: ProviderService = Depends(get_provider_service),
) -> List[Dict[str, Any]]:
    """List verified providers."""
    try:
        return await providers.list_providers(service=service, location=location)
    except StoreError as e:
        raise server_error(e)


@router.get("/{provider_id}")
async def get_provider(
    provider_id: str = Path(..., description="ID of the provider profile"),
    providers: ProviderService = Depends(get_provider_service),
) -> Dict[str, Any]:
    try:
        return await providers.get_provider(provider_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StoreError as e:
        raise server_error(e)
