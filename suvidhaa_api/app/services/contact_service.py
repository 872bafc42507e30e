"""
Business logic for the contact form.

Anyone may submit an inquiry; reading them requires a signed-in caller.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from suvidhaa_api.app.core import policy
from suvidhaa_api.app.core.db import CONTACTS, DocumentStore
from suvidhaa_api.app.core.exceptions import PermissionDeniedError, ValidationError
from suvidhaa_api.app.schemas.contact import ContactCreate

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def submit(self, data: ContactCreate) -> Dict[str, Any]:
        """Store an inquiry with status ``new``.

        ``name``, ``email``, ``subject`` and ``message`` are required; a
        ``ValidationError`` is raised if any of them is missing.
        """
        if not all((data.name, data.email, data.subject, data.message)):
            raise ValidationError("Required fields missing")
        contact = self.store.insert_one(
            CONTACTS,
            {
                "name": data.name,
                "email": data.email,
                "phone": data.phone,
                "subject": data.subject,
                "message": data.message,
                "status": "new",
                "createdAt": datetime.now(timezone.utc),
            },
        )
        logger.info("Contact inquiry %s received from %s", contact["_id"], data.email)
        return contact

    async def list_contacts(self, caller_id: str, caller_role: str) -> List[Dict[str, Any]]:
        """All inquiries, newest first."""
        if not policy.can_read_contacts(caller_id, caller_role):
            raise PermissionDeniedError("You are not allowed to read contact inquiries")
        return self.store.find(CONTACTS, sort=[("createdAt", -1)])
