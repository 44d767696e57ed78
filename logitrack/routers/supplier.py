"""
Supplier Router
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from logitrack.schemas.common_schema import MessageResponseSchema
from logitrack.schemas.contact_schema import AllContactsResponseSchema, ContactResponseSchema, ContactSchema
from logitrack.services.core.wrap import check_authentication
from logitrack.services.interfaces.supplier_service_interface import ISupplierService
from logitrack.services.routers.auth_service import authorize, db_dependency, get_current_user
from .dependencies import LIMIT_DEFAULT, MAX_LIMIT

router = APIRouter(
    prefix="/api/v1/suppliers",
    tags=["Supplier"],
)


def get_supplier_service(db: db_dependency) -> ISupplierService:
    """Dependency injection per Supplier Service"""
    from logitrack.core.container_config import get_configured_container
    return get_configured_container().resolve_with_session(ISupplierService, db)


@router.get("/", status_code=status.HTTP_200_OK, response_model=AllContactsResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_all_suppliers(
    user: dict = Depends(get_current_user),
    supplier_service: ISupplierService = Depends(get_supplier_service),
    search: Optional[str] = Query(None, description="Ricerca per nome"),
    page: int = Query(1, gt=0),
    limit: int = Query(LIMIT_DEFAULT, gt=0, le=MAX_LIMIT)
):
    """
    Restituisce i fornitori ordinati per nome.

    - **search**: sottostringa del nome, senza distinzione maiuscole/minuscole.
    - **page**, **limit**: paginazione.
    """
    return await supplier_service.list_contacts(search=search, page=page, limit=limit)


@router.get("/{supplier_id}", status_code=status.HTTP_200_OK, response_model=ContactResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_supplier_by_id(
    user: dict = Depends(get_current_user),
    supplier_service: ISupplierService = Depends(get_supplier_service),
    supplier_id: UUID = Path(...)
):
    return await supplier_service.get_contact(str(supplier_id))


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=ContactResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['C'])
async def create_supplier(
    supplier_data: ContactSchema,
    user: dict = Depends(get_current_user),
    supplier_service: ISupplierService = Depends(get_supplier_service)
):
    return await supplier_service.create_contact(supplier_data)


@router.put("/{supplier_id}", status_code=status.HTTP_200_OK, response_model=ContactResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['U'])
async def update_supplier(
    supplier_data: ContactSchema,
    user: dict = Depends(get_current_user),
    supplier_service: ISupplierService = Depends(get_supplier_service),
    supplier_id: UUID = Path(...)
):
    return await supplier_service.update_contact(str(supplier_id), supplier_data)


@router.delete("/{supplier_id}", status_code=status.HTTP_200_OK, response_model=MessageResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['D'])
async def delete_supplier(
    user: dict = Depends(get_current_user),
    supplier_service: ISupplierService = Depends(get_supplier_service),
    supplier_id: UUID = Path(...),
    confirm: bool = Query(False, description="Conferma esplicita dell'eliminazione")
):
    """
    Elimina un fornitore. Senza ``confirm=true`` risponde 428 riportando il nome;
    se il fornitore è usato da un ordine l'eliminazione viene rifiutata (409).
    """
    await supplier_service.delete_contact(str(supplier_id), confirm=confirm)
    return {"message": "Supplier deleted"}
