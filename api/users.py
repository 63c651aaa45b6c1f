"""
Current-user routes.

Route prefix: /users
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from auth.dependencies import get_current_user_id, get_user_store, require_identity
from auth.errors import CredentialsConflict, Unauthenticated
from database.errors import EmailAlreadyExists
from database.users import UserStore
from utils.schemas import EditUserRequest, UserOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"], dependencies=[Depends(require_identity)])


@router.get("/me", response_model=UserOut)
async def get_me(
    user_id: int = Depends(get_current_user_id),
    users: UserStore = Depends(get_user_store),
) -> UserOut:
    user = await users.get_user(user_id)
    if user is None:
        # valid token for a user that no longer exists
        raise Unauthenticated()
    return UserOut.model_validate(user)


@router.patch("", response_model=UserOut)
async def edit_user(
    req: EditUserRequest,
    user_id: int = Depends(get_current_user_id),
    users: UserStore = Depends(get_user_store),
) -> UserOut:
    try:
        user = await users.update_user(user_id, **req.model_dump(exclude_unset=True))
    except EmailAlreadyExists as exc:
        raise CredentialsConflict() from exc
    if user is None:
        raise Unauthenticated()
    logger.info("Updated profile of user %s", user_id)
    return UserOut.model_validate(user)
