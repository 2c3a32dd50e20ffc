"""User registration endpoints."""

from fastapi import APIRouter, Depends

from fleet_api.application.schemas import UserResponse
from fleet_api.application.services import UserService
from fleet_api.infrastructure.dependencies import get_current_subject, get_user_service
from fleet_api.presentation.api.v1.guards import require_json_accept
from fleet_api.presentation.api.v1.representation import user_response

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserResponse, dependencies=[Depends(require_json_accept)])
async def register_user(
    subject: str = Depends(get_current_subject),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Register the caller's subject id. Repeat calls return the same user."""
    user = await service.register(subject)
    return user_response(user)


@router.get("", response_model=list[UserResponse], dependencies=[Depends(require_json_accept)])
async def list_users(service: UserService = Depends(get_user_service)) -> list[UserResponse]:
    users = await service.list_users()
    return [user_response(u) for u in users]
