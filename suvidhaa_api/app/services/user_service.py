"""
Business logic for user accounts.

``UserService`` implements signup, login and profile lookup on top of the
injected document store.  E-mail addresses are stored lower-cased so the
uniqueness check and the login lookup are case-insensitive.  Passwords are
hashed with ``core.security.hash_password`` and never leave the service.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from suvidhaa_api.app.core.db import USERS, DocumentStore
from suvidhaa_api.app.core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from suvidhaa_api.app.core.policy import CUSTOMER
from suvidhaa_api.app.core.security import hash_password, issue_token, verify_password
from suvidhaa_api.app.schemas.user import LoginRequest, SignupRequest, UserPublic

logger = logging.getLogger(__name__)

GENDERS = ("male", "female", "other")
MIN_PASSWORD_LENGTH = 8


def normalize_email(email: str) -> str:
    return email.strip().lower()


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """Project a stored user onto the fields returned with a token."""
    return UserPublic(
        id=user["_id"],
        full_name=user["fullName"],
        email=user["email"],
        role=user["role"],
    ).model_dump(by_alias=True)


class UserService:
    """Service for user accounts."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def signup(self, data: SignupRequest) -> Dict[str, Any]:
        """Register a customer and return ``{"token", "user"}``.

        Raises ``ValidationError`` when a field is missing, the gender is
        unknown or the password is shorter than eight characters, and
        ``DuplicateEmailError`` when the address is already registered.
        """
        if not all((data.full_name, data.email, data.phone, data.gender, data.password)):
            raise ValidationError("All fields are required")
        gender = data.gender.strip().lower()
        if gender not in GENDERS:
            raise ValidationError("Gender must be one of: male, female, other")
        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        email = normalize_email(data.email)
        if self.store.find_one(USERS, {"email": email}):
            raise DuplicateEmailError("User already exists with this email")

        user = self.store.insert_one(
            USERS,
            {
                "fullName": data.full_name.strip(),
                "email": email,
                "phone": data.phone.strip(),
                "gender": gender,
                "password": hash_password(data.password),
                "role": CUSTOMER,
                "createdAt": datetime.now(timezone.utc),
            },
        )
        logger.info("Registered user %s (%s)", user["_id"], email)
        return {"token": issue_token(user["_id"], user["role"]), "user": public_user(user)}

    async def login(self, data: LoginRequest) -> Dict[str, Any]:
        """Authenticate by e-mail and password and return ``{"token", "user"}``.

        Unknown e-mail and wrong password raise the same
        ``InvalidCredentialsError`` so the response does not reveal which
        addresses are registered.
        """
        if not data.email or not data.password:
            raise ValidationError("Email and password are required")
        user = self.store.find_one(USERS, {"email": normalize_email(data.email)})
        if not user or not verify_password(data.password, user.get("password", "")):
            logger.info("Rejected login attempt for %s", data.email)
            raise InvalidCredentialsError("Invalid credentials")
        return {"token": issue_token(user["_id"], user["role"]), "user": public_user(user)}

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        """Return the stored user without its password hash."""
        user = self.store.find_one(USERS, {"_id": user_id})
        if not user:
            raise NotFoundError("User not found")
        user.pop("password", None)
        return user

    async def set_role(self, user_id: str, role: str) -> Optional[Dict[str, Any]]:
        """Change a user's role; returns ``None`` if the user does not exist."""
        return self.store.update_one(USERS, {"_id": user_id}, {"role": role})

    async def contact_card(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Return name, e-mail and phone of a user for embedding in other records."""
        user = self.store.find_one(USERS, {"_id": user_id})
        if not user:
            return None
        return {
            "_id": user["_id"],
            "fullName": user.get("fullName"),
            "email": user.get("email"),
            "phone": user.get("phone"),
        }
