"""
Order Router
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from logitrack.models.order import OrderStatus
from logitrack.schemas.common_schema import MessageResponseSchema
from logitrack.schemas.order_document_schema import OrderDocumentResponseSchema
from logitrack.schemas.order_schema import (
    AllOrdersResponseSchema,
    FormOptionsSchema,
    OrderFormSchema,
    OrderResponseSchema,
    OrderSchema,
    StatusBadgeSchema,
)
from logitrack.services.core.wrap import check_authentication
from logitrack.services.interfaces.order_document_service_interface import IOrderDocumentService
from logitrack.services.interfaces.order_service_interface import IOrderService
from logitrack.services.routers.auth_service import authorize, db_dependency, get_current_user
from .dependencies import LIMIT_DEFAULT, MAX_LIMIT, get_locale

router = APIRouter(
    prefix="/api/v1/orders",
    tags=["Order"],
)


def get_order_service(db: db_dependency) -> IOrderService:
    """Dependency injection per Order Service"""
    from logitrack.core.container_config import get_configured_container
    return get_configured_container().resolve_with_session(IOrderService, db)


def get_order_document_service(db: db_dependency) -> IOrderDocumentService:
    from logitrack.core.container_config import get_configured_container
    return get_configured_container().resolve_with_session(IOrderDocumentService, db)


def parse_order_payload(order: str) -> OrderSchema:
    """Valida il campo JSON ``order`` di una richiesta multipart"""
    try:
        return OrderSchema.model_validate_json(order)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False))


async def read_staged_file(file: Optional[UploadFile]):
    """Nome e contenuto del file allegato, (None, None) se assente"""
    if file is None or not file.filename:
        return None, None
    content = await file.read()
    return file.filename, content


@router.get("/", status_code=status.HTTP_200_OK, response_model=AllOrdersResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_all_orders(
    user: dict = Depends(get_current_user),
    order_service: IOrderService = Depends(get_order_service),
    locale: str = Depends(get_locale),
    search: Optional[str] = Query(None, description="Ricerca nel riferimento ordine"),
    order_status: Optional[OrderStatus] = Query(None, alias="status", description="Filtro per stato"),
    page: int = Query(1, gt=0),
    limit: int = Query(LIMIT_DEFAULT, gt=0, le=MAX_LIMIT)
):
    """
    Restituisce gli ordini dal più recente (order_date).

    - **search**: sottostringa del riferimento, senza distinzione maiuscole/minuscole.
    - **status**: stato esatto; se assente nessun filtro.
    - Ogni riga riporta i nomi di fornitore, destinazione e vettore e il badge di stato localizzato.
    """
    return await order_service.list_orders(
        search=search, status=order_status, page=page, limit=limit, locale=locale
    )


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=OrderResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['C'])
async def create_order(
    order_data: OrderSchema,
    user: dict = Depends(get_current_user),
    order_service: IOrderService = Depends(get_order_service),
    locale: str = Depends(get_locale)
):
    return await order_service.create_order(order_data, locale=locale)


@router.post("/form", status_code=status.HTTP_201_CREATED, response_model=OrderResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['C'])
async def create_order_from_form(
    user: dict = Depends(get_current_user),
    order_service: IOrderService = Depends(get_order_service),
    locale: str = Depends(get_locale),
    order: str = Form(..., description="Campi dell'ordine in formato JSON"),
    file: Optional[UploadFile] = File(None),
    document_name: Optional[str] = Form(None)
):
    """
    Crea un ordine e carica il documento allegato, se presente.

    Se il caricamento fallisce l'ordine resta salvato e la risposta è 502
    con ``order_id`` e ``retry_path`` nei details.
    """
    order_data = parse_order_payload(order)
    filename, content = await read_staged_file(file)
    return await order_service.save_order_with_document(
        None, order_data, filename=filename, content=content, document_name=document_name, locale=locale
    )


@router.get("/options", status_code=status.HTTP_200_OK, response_model=FormOptionsSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_form_options(
    user: dict = Depends(get_current_user),
    order_service: IOrderService = Depends(get_order_service)
):
    """Fornitori, vettori, destinazioni e tipi di container per i menu del form"""
    return await order_service.get_form_options()


@router.get("/statuses", status_code=status.HTTP_200_OK, response_model=List[StatusBadgeSchema])
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_statuses(
    user: dict = Depends(get_current_user),
    order_service: IOrderService = Depends(get_order_service),
    locale: str = Depends(get_locale)
):
    return await order_service.get_statuses(locale=locale)


@router.get("/{order_id}", status_code=status.HTTP_200_OK, response_model=OrderResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_order_by_id(
    user: dict = Depends(get_current_user),
    order_service: IOrderService = Depends(get_order_service),
    locale: str = Depends(get_locale),
    order_id: UUID = Path(...)
):
    return await order_service.get_order(str(order_id), locale=locale)


@router.put("/{order_id}", status_code=status.HTTP_200_OK, response_model=OrderResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['U'])
async def update_order(
    order_data: OrderSchema,
    user: dict = Depends(get_current_user),
    order_service: IOrderService = Depends(get_order_service),
    locale: str = Depends(get_locale),
    order_id: UUID = Path(...)
):
    return await order_service.update_order(str(order_id), order_data, locale=locale)


@router.delete("/{order_id}", status_code=status.HTTP_200_OK, response_model=MessageResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['D'])
async def delete_order(
    user: dict = Depends(get_current_user),
    order_service: IOrderService = Depends(get_order_service),
    locale: str = Depends(get_locale),
    order_id: UUID = Path(...),
    confirm: bool = Query(False, description="Conferma esplicita dell'eliminazione")
):
    """
    Elimina l'ordine, i suoi documenti e i relativi file.

    Senza ``confirm=true`` risponde 428 riportando fornitore, destinazione e stato.
    """
    await order_service.delete_order(str(order_id), confirm=confirm, locale=locale)
    return {"message": "Order deleted"}


@router.get("/{order_id}/form", status_code=status.HTTP_200_OK, response_model=OrderFormSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_order_form(
    user: dict = Depends(get_current_user),
    order_service: IOrderService = Depends(get_order_service),
    order_id: UUID = Path(...)
):
    """Ordine per la modifica: le date sono ridotte al giorno (YYYY-MM-DD)"""
    return await order_service.get_order_form(str(order_id))


@router.put("/{order_id}/form", status_code=status.HTTP_200_OK, response_model=OrderResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['U'])
async def update_order_from_form(
    user: dict = Depends(get_current_user),
    order_service: IOrderService = Depends(get_order_service),
    locale: str = Depends(get_locale),
    order_id: UUID = Path(...),
    order: str = Form(..., description="Campi dell'ordine in formato JSON"),
    file: Optional[UploadFile] = File(None),
    document_name: Optional[str] = Form(None)
):
    order_data = parse_order_payload(order)
    filename, content = await read_staged_file(file)
    return await order_service.save_order_with_document(
        str(order_id), order_data, filename=filename, content=content, document_name=document_name, locale=locale
    )


@router.get("/{order_id}/documents", status_code=status.HTTP_200_OK,
            response_model=List[OrderDocumentResponseSchema])
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_order_documents(
    user: dict = Depends(get_current_user),
    order_document_service: IOrderDocumentService = Depends(get_order_document_service),
    order_id: UUID = Path(...)
):
    return await order_document_service.list_documents(str(order_id))


@router.post("/{order_id}/documents", status_code=status.HTTP_201_CREATED,
             response_model=OrderDocumentResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['C'])
async def upload_order_document(
    user: dict = Depends(get_current_user),
    order_document_service: IOrderDocumentService = Depends(get_order_document_service),
    order_id: UUID = Path(...),
    file: UploadFile = File(...),
    name: Optional[str] = Form(None)
):
    """
    Carica un documento per l'ordine. Il file viene salvato in
    ``<order_id>/<nome file>``; un nome già presente per l'ordine risponde 409.
    """
    content = await file.read()
    return await order_document_service.upload_document(str(order_id), file.filename, content, name)
