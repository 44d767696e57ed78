"""
Carrier Router
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from logitrack.schemas.common_schema import MessageResponseSchema
from logitrack.schemas.contact_schema import AllContactsResponseSchema, ContactResponseSchema, ContactSchema
from logitrack.schemas.dashboard_schema import CarrierStatsSchema
from logitrack.services.core.wrap import check_authentication
from logitrack.services.interfaces.carrier_service_interface import ICarrierService
from logitrack.services.routers.auth_service import authorize, db_dependency, get_current_user
from .dependencies import LIMIT_DEFAULT, MAX_LIMIT

router = APIRouter(
    prefix="/api/v1/carriers",
    tags=["Carrier"],
)


def get_carrier_service(db: db_dependency) -> ICarrierService:
    """Dependency injection per Carrier Service"""
    from logitrack.core.container_config import get_configured_container
    return get_configured_container().resolve_with_session(ICarrierService, db)


@router.get("/", status_code=status.HTTP_200_OK, response_model=AllContactsResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_all_carriers(
    user: dict = Depends(get_current_user),
    carrier_service: ICarrierService = Depends(get_carrier_service),
    search: Optional[str] = Query(None, description="Ricerca per nome"),
    page: int = Query(1, gt=0),
    limit: int = Query(LIMIT_DEFAULT, gt=0, le=MAX_LIMIT)
):
    """
    Restituisce i vettori ordinati per nome.

    - **search**: sottostringa del nome, senza distinzione maiuscole/minuscole.
    - **page**, **limit**: paginazione.
    """
    return await carrier_service.list_contacts(search=search, page=page, limit=limit)


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=List[CarrierStatsSchema])
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_carrier_stats(
    user: dict = Depends(get_current_user),
    carrier_service: ICarrierService = Depends(get_carrier_service)
):
    """
    Statistiche per vettore, ordinate per nome.

    Il prezzo medio e la variazione considerano gli ultimi sei mesi (per data ordine).
    """
    return await carrier_service.get_carrier_stats()


@router.get("/{carrier_id}", status_code=status.HTTP_200_OK, response_model=ContactResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_carrier_by_id(
    user: dict = Depends(get_current_user),
    carrier_service: ICarrierService = Depends(get_carrier_service),
    carrier_id: UUID = Path(...)
):
    return await carrier_service.get_contact(str(carrier_id))


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=ContactResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['C'])
async def create_carrier(
    carrier_data: ContactSchema,
    user: dict = Depends(get_current_user),
    carrier_service: ICarrierService = Depends(get_carrier_service)
):
    return await carrier_service.create_contact(carrier_data)


@router.put("/{carrier_id}", status_code=status.HTTP_200_OK, response_model=ContactResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['U'])
async def update_carrier(
    carrier_data: ContactSchema,
    user: dict = Depends(get_current_user),
    carrier_service: ICarrierService = Depends(get_carrier_service),
    carrier_id: UUID = Path(...)
):
    return await carrier_service.update_contact(str(carrier_id), carrier_data)


@router.delete("/{carrier_id}", status_code=status.HTTP_200_OK, response_model=MessageResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['D'])
async def delete_carrier(
    user: dict = Depends(get_current_user),
    carrier_service: ICarrierService = Depends(get_carrier_service),
    carrier_id: UUID = Path(...),
    confirm: bool = Query(False, description="Conferma esplicita dell'eliminazione")
):
    """
    Elimina un vettore. Senza ``confirm=true`` risponde 428 riportando il nome;
    se il vettore è usato da un ordine l'eliminazione viene rifiutata (409).
    """
    await carrier_service.delete_contact(str(carrier_id), confirm=confirm)
    return {"message": "Carrier deleted"}
