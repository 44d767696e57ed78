"""
Destination Router
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from logitrack.schemas.common_schema import MessageResponseSchema
from logitrack.schemas.contact_schema import AllContactsResponseSchema, ContactResponseSchema, ContactSchema
from logitrack.services.core.wrap import check_authentication
from logitrack.services.interfaces.destination_service_interface import IDestinationService
from logitrack.services.routers.auth_service import authorize, db_dependency, get_current_user
from .dependencies import LIMIT_DEFAULT, MAX_LIMIT

router = APIRouter(
    prefix="/api/v1/destinations",
    tags=["Destination"],
)


def get_destination_service(db: db_dependency) -> IDestinationService:
    """Dependency injection per Destination Service"""
    from logitrack.core.container_config import get_configured_container
    return get_configured_container().resolve_with_session(IDestinationService, db)


@router.get("/", status_code=status.HTTP_200_OK, response_model=AllContactsResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_all_destinations(
    user: dict = Depends(get_current_user),
    destination_service: IDestinationService = Depends(get_destination_service),
    search: Optional[str] = Query(None, description="Ricerca per nome"),
    page: int = Query(1, gt=0),
    limit: int = Query(LIMIT_DEFAULT, gt=0, le=MAX_LIMIT)
):
    """
    Restituisce le destinazioni ordinati per nome.

    - **search**: sottostringa del nome, senza distinzione maiuscole/minuscole.
    - **page**, **limit**: paginazione.
    """
    return await destination_service.list_contacts(search=search, page=page, limit=limit)


@router.get("/{destination_id}", status_code=status.HTTP_200_OK, response_model=ContactResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_destination_by_id(
    user: dict = Depends(get_current_user),
    destination_service: IDestinationService = Depends(get_destination_service),
    destination_id: UUID = Path(...)
):
    return await destination_service.get_contact(str(destination_id))


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=ContactResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['C'])
async def create_destination(
    destination_data: ContactSchema,
    user: dict = Depends(get_current_user),
    destination_service: IDestinationService = Depends(get_destination_service)
):
    return await destination_service.create_contact(destination_data)


@router.put("/{destination_id}", status_code=status.HTTP_200_OK, response_model=ContactResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['U'])
async def update_destination(
    destination_data: ContactSchema,
    user: dict = Depends(get_current_user),
    destination_service: IDestinationService = Depends(get_destination_service),
    destination_id: UUID = Path(...)
):
    return await destination_service.update_contact(str(destination_id), destination_data)


@router.delete("/{destination_id}", status_code=status.HTTP_200_OK, response_model=MessageResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['D'])
async def delete_destination(
    user: dict = Depends(get_current_user),
    destination_service: IDestinationService = Depends(get_destination_service),
    destination_id: UUID = Path(...),
    confirm: bool = Query(False, description="Conferma esplicita dell'eliminazione")
):
    """
    Elimina una destinazione. Senza ``confirm=true`` risponde 428 riportando il nome;
    se la destinazione è usata da un ordine l'eliminazione viene rifiutata (409).
    """
    await destination_service.delete_contact(str(destination_id), confirm=confirm)
    return {"message": "Destination deleted"}
