"""User Registration Route: POST /register-user.

Invariants:
    - Idempotent: repeated calls with the same email return the same userId
    - Blank/missing name or email → 400 via ValidationError

Design Decisions:
    - Thin route: RegistrationHandler does the work (ADR: routes never contain business logic)
"""

import logging

from fastapi import APIRouter, Depends

from chat_relay.api.dependencies import get_registration_handler
from chat_relay.schemas.chat import RegisterUserRequest, RegisterUserResponse
from chat_relay.services.registration import RegistrationHandler

logger = logging.getLogger(__name__)
router = APIRouter(tags=["users"])


@router.post("/register-user", response_model=RegisterUserResponse)
async def register_user(
    body: RegisterUserRequest,
    handler: RegistrationHandler = Depends(get_registration_handler),
):
    """Ensure the user exists in the chat directory and the store."""
    user = await handler.register(body.name, body.email)
    return RegisterUserResponse(
        user_id=user.user_id, name=user.name, email=user.email,
    )
