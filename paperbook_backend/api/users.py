"""User API endpoints that fall outside the generic CRUD routes."""

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from paperbook_backend.business_logic.services import Services, get_services
from paperbook_backend.interfaces.user import UserGet
from paperbook_backend.permissions.auth import get_current_principal
from paperbook_backend.permissions.principal import Principal

# Included ahead of the CRUD routes so "/me" is not parsed as an id
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.get("/me", response_model=UserGet)
async def get_current_user(
    principal: Principal = Depends(get_current_principal),
    services: Services = Depends(get_services),
):
    """Get the authenticated user."""
    def _get_user():
        user = services.users.get(principal.user_id, principal)
        return UserGet.model_validate(user, from_attributes=True)

    return await run_in_threadpool(_get_user)
