from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user
from app.core.db import get_db
from app.domains.identity.entities import User
from app.domains.identity.schemas import UserResponse
from app.domains.identity.services import IdentityService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/writers", response_model=List[UserResponse])
async def get_writers(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Writers and admins other than the caller; feeds the ``writer`` listing filter"""
    identity_service = IdentityService(db)
    return await identity_service.list_staff(exclude_id=current_user.id)
