"""
Contact form endpoints.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from suvidhaa_api.app.api.deps import get_contact_service, server_error
from suvidhaa_api.app.core.db import StoreError
from suvidhaa_api.app.core.exceptions import ServiceError
from suvidhaa_api.app.core.security import get_current_user
from suvidhaa_api.app.schemas.contact import ContactCreate
from suvidhaa_api.app.services.contact_service import ContactService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_contact(
    payload: Optional[ContactCreate] = None,
    contacts: ContactService = Depends(get_contact_service),
) -> Dict[str, Any]:
    """Store a contact form submission.  No sign-in required."""
    try:
        contact = await contacts.submit(payload or ContactCreate())
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StoreError as e:
        raise server_error(e)
    return {
        "message": "Thank you for contacting us! We will get back to you soon.",
        "contact": contact,
    }


@router.get("")
async def list_contacts(
    current_user: dict = Depends(get_current_user),
    contacts: ContactService = Depends(get_contact_service),
) -> List[Dict[str, Any]]:
    try:
        return await contacts.list_contacts(current_user["user_id"], current_user["role"])
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StoreError as e:
        raise server_error(e)
