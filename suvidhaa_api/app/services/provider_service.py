"""
Business logic for the provider directory.

A provider profile belongs to exactly one user.  Registering one flips the
owning user's role to ``provider``.  Profiles start unverified and only
verified profiles appear in the public listing; verification itself is an
operator task performed directly in the store.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from suvidhaa_api.app.core.db import PROVIDERS, DocumentStore
from suvidhaa_api.app.core.exceptions import AlreadyRegisteredError, NotFoundError
from suvidhaa_api.app.core.policy import PROVIDER
from suvidhaa_api.app.schemas.provider import ProviderRegister
from suvidhaa_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)


class ProviderService:
    """Service for provider profiles."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store
        self.users = UserService(store)

    async def register(self, user_id: str, data: ProviderRegister) -> Dict[str, Any]:
        """Create the provider profile of ``user_id``.

        Raises ``AlreadyRegisteredError`` if the user already has one and
        ``NotFoundError`` if the user no longer exists.
        """
        if self.store.find_one(PROVIDERS, {"userId": user_id}):
            raise AlreadyRegisteredError("Already registered as provider")
        if await self.users.set_role(user_id, PROVIDER) is None:
            raise NotFoundError("User not found")
        provider = self.store.insert_one(
            PROVIDERS,
            {
                "userId": user_id,
                "services": [s.strip() for s in data.services if s and s.strip()],
                "experience": data.experience,
                "location": data.location,
                "availability": data.availability,
                "rating": 0,
                "totalReviews": 0,
                "verified": False,
                "createdAt": datetime.now(timezone.utc),
            },
        )
        logger.info("User %s registered as provider %s", user_id, provider["_id"])
        return provider

    async def list_providers(
        self, service: Optional[str] = None, location: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Return verified providers, optionally filtered.

        ``service`` must equal one of the provider's services exactly;
        ``location`` matches any part of the provider's location, ignoring
        case.
        """
        query: Dict[str, Any] = {"verified": True}
        if service:
            query["services"] = service
        if location:
            query["location"] = {"$regex": re.escape(location), "$options": "i"}
        providers = self.store.find(PROVIDERS, query)
        for provider in providers:
            provider["user"] = await self.users.contact_card(provider["userId"])
        return providers

    async def get_provider(self, provider_id: str) -> Dict[str, Any]:
        provider = await self.find(provider_id)
        if not provider:
            raise NotFoundError("Provider not found")
        provider["user"] = await self.users.contact_card(provider["userId"])
        return provider

    async def find(self, provider_id: str) -> Optional[Dict[str, Any]]:
        return self.store.find_one(PROVIDERS, {"_id": provider_id})

    async def find_by_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self.store.find_one(PROVIDERS, {"userId": user_id})
