"""
OrderDocument Router
"""
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status

from logitrack.schemas.common_schema import MessageResponseSchema
from logitrack.schemas.order_document_schema import OrderDocumentRenameSchema, OrderDocumentResponseSchema
from logitrack.services.core.wrap import check_authentication
from logitrack.services.interfaces.order_document_service_interface import IOrderDocumentService
from logitrack.services.routers.auth_service import authorize, get_current_user
from .order import get_order_document_service

router = APIRouter(
    prefix="/api/v1/order-documents",
    tags=["OrderDocument"],
)


@router.patch("/{document_id}", status_code=status.HTTP_200_OK, response_model=OrderDocumentResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['U'])
async def rename_document(
    document_data: OrderDocumentRenameSchema,
    user: dict = Depends(get_current_user),
    order_document_service: IOrderDocumentService = Depends(get_order_document_service),
    document_id: UUID = Path(...)
):
    return await order_document_service.rename_document(str(document_id), document_data.name)


@router.delete("/{document_id}", status_code=status.HTTP_200_OK, response_model=MessageResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['D'])
async def delete_document(
    user: dict = Depends(get_current_user),
    order_document_service: IOrderDocumentService = Depends(get_order_document_service),
    document_id: UUID = Path(...)
):
    """Elimina la riga del documento e il file nello storage"""
    await order_document_service.delete_document(str(document_id))
    return {"message": "Document deleted"}
