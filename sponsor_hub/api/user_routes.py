# sponsor_hub/api/user_routes.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from sponsor_hub.auth.deps import get_confirmed_user, require_permission
from sponsor_hub.crud import surveys as survey_store
from sponsor_hub.crud import users as user_store
from sponsor_hub.db.session import get_db
from sponsor_hub.models.user import User, UserPermissions
from sponsor_hub.schemas.common import ActionResponse, RowId
from sponsor_hub.schemas.survey import SurveyOut
from sponsor_hub.schemas.user import PermissionsUpdate, PrivilegedUser, UserUpdate

router = APIRouter(prefix="/users", tags=["Users"])


def _target_user(user_id: int, caller: User, db: Session) -> User:
    """Resolve ``user_id`` (0 = caller) to a user the caller may see."""
    if user_id == 0 or user_id == caller.id:
        return user_store.load_user_as_self(db, caller.id, caller.id)
    if not caller.has_permission(UserPermissions.ADMIN):
        raise HTTPException(status_code=403, detail="Trying to access someone else's details?")
    target = user_store.get_user(db, user_id)
    if target is None:
        raise HTTPException(status_code=404, detail="User not found")
    return target


@router.get("/{user_id}", response_model=PrivilegedUser)
def load_user(
    user_id: RowId,
    caller: User = Depends(get_confirmed_user),
    db: Session = Depends(get_db),
):
    return _target_user(user_id, caller, db)


@router.put("/{user_id}", response_model=ActionResponse)
def update_user(
    user_id: RowId,
    user_in: UserUpdate,
    caller: User = Depends(get_confirmed_user),
    db: Session = Depends(get_db),
):
    user = _target_user(user_id, caller, db)
    user.name = user_in.name
    user.email = user_in.email
    resource_id = user_store.update_user(db, user)
    return ActionResponse(
        status=status.HTTP_200_OK,
        message="User updated successfully",
        resource_id=resource_id,
    )


@router.put("/{user_id}/permissions", response_model=ActionResponse)
def update_permissions(
    user_id: RowId,
    body: PermissionsUpdate,
    caller: User = Depends(require_permission(UserPermissions.ADMIN)),
    db: Session = Depends(get_db),
):
    user = user_store.get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    resource_id = user_store.set_permissions(db, user, body.permissions)
    return ActionResponse(
        status=status.HTTP_200_OK,
        message="Permissions updated successfully",
        resource_id=resource_id,
    )


@router.get("/{user_id}/sponsored-surveys", response_model=List[SurveyOut])
def sponsored_surveys(
    user_id: RowId,
    caller: User = Depends(get_confirmed_user),
    db: Session = Depends(get_db),
):
    """Surveys the user sponsors"""
    user = _target_user(user_id, caller, db)
    return survey_store.list_surveys_for_user_id(db, user.id)
