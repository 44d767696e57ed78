"""
User Router (solo amministratori)
"""
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from logitrack.schemas.common_schema import MessageResponseSchema
from logitrack.schemas.user_schema import AllUsersResponseSchema, UserResponseSchema, UserSchema
from logitrack.services.core.wrap import check_authentication
from logitrack.services.interfaces.user_service_interface import IUserService
from logitrack.services.routers.auth_service import authorize, db_dependency, get_current_user
from logitrack.services.routers.user_service import serialize_user
from .dependencies import LIMIT_DEFAULT, MAX_LIMIT, get_locale

router = APIRouter(
    prefix="/api/v1/users",
    tags=["User"],
)


def get_user_service(db: db_dependency) -> IUserService:
    """Dependency injection per User Service"""
    from logitrack.core.container_config import get_configured_container
    return get_configured_container().resolve_with_session(IUserService, db)


@router.get("/", status_code=status.HTTP_200_OK, response_model=AllUsersResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN'], permissions_required=['R'])
async def get_all_users(
    user: dict = Depends(get_current_user),
    user_service: IUserService = Depends(get_user_service),
    locale: str = Depends(get_locale),
    page: int = Query(1, gt=0),
    limit: int = Query(LIMIT_DEFAULT, gt=0, le=MAX_LIMIT)
):
    """
    Restituisce gli account con stato (Confermato/In attesa), ultimo accesso e data di creazione.
    """
    return await user_service.list_users(page=page, limit=limit, locale=locale)


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=UserResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN'], permissions_required=['C'])
async def create_user(
    user_data: UserSchema,
    user: dict = Depends(get_current_user),
    user_service: IUserService = Depends(get_user_service),
    locale: str = Depends(get_locale)
):
    """Crea un account già confermato; la password deve avere almeno 6 caratteri"""
    created = await user_service.create_user(user_data)
    return serialize_user(created, locale)


@router.delete("/{user_id}", status_code=status.HTTP_200_OK, response_model=MessageResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN'], permissions_required=['D'])
async def delete_user(
    user: dict = Depends(get_current_user),
    user_service: IUserService = Depends(get_user_service),
    user_id: UUID = Path(...),
    confirm: bool = Query(False, description="Conferma esplicita dell'eliminazione")
):
    """Elimina l'account e revoca le sue sessioni. Un amministratore non può eliminare se stesso."""
    await user_service.delete_user(str(user_id), confirm=confirm, current_user_id=user["id"])
    return {"message": "User deleted"}
