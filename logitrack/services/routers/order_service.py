"""
Order Service
"""
import logging
from typing import Any, Dict, List, Optional

from logitrack.core.cached import cached
from logitrack.core.exceptions import (
    BaseApplicationException,
    ConfirmationRequiredException,
    DocumentUploadException,
    ErrorCode,
    ValidationException,
)
from logitrack.core.i18n import resolve_locale, status_badge, status_label
from logitrack.core.invalidation import invalidate_entity
from logitrack.models.order import Order, OrderStatus
from logitrack.repository.interfaces.carrier_repository_interface import ICarrierRepository
from logitrack.repository.interfaces.destination_repository_interface import IDestinationRepository
from logitrack.repository.interfaces.order_repository_interface import IOrderRepository
from logitrack.repository.interfaces.supplier_repository_interface import ISupplierRepository
from logitrack.schemas.order_schema import DATE_FIELDS, OrderFormSchema, OrderResponseSchema, OrderSchema
from logitrack.services.core.tool import to_calendar_date
from logitrack.services.interfaces.container_type_service_interface import IContainerTypeService
from logitrack.services.interfaces.order_document_service_interface import IOrderDocumentService
from logitrack.services.interfaces.order_service_interface import IOrderService
from logitrack.services.routers.order_document_service import serialize_document
from logitrack.services.storage.document_storage import IDocumentStorage

logger = logging.getLogger(__name__)

_RELATION_FIELDS = ('supplier_id', 'destination_id', 'carrier_id')

_ORDER_COLUMNS = (
    'id', 'reference', 'supplier_id', 'destination_id', 'carrier_id', 'product_description', 'container_type',
    'container_reference', 'transport_price', 'order_value', 'status', 'initial_payment_amount',
    'final_payment_amount',
) + DATE_FIELDS


def _relation_name(entity) -> Optional[str]:
    return entity.name if entity is not None else None


class OrderService(IOrderService):
    """Ordini: lista, form, salvataggio con documento e cancellazione"""

    def __init__(self,
                 order_repository: IOrderRepository,
                 supplier_repository: ISupplierRepository,
                 carrier_repository: ICarrierRepository,
                 destination_repository: IDestinationRepository,
                 container_type_service: IContainerTypeService,
                 order_document_service: IOrderDocumentService,
                 document_storage: IDocumentStorage):
        self._order_repository = order_repository
        self._supplier_repository = supplier_repository
        self._carrier_repository = carrier_repository
        self._destination_repository = destination_repository
        self._container_type_service = container_type_service
        self._order_document_service = order_document_service
        self._storage = document_storage

    def _base_fields(self, order: Order) -> Dict[str, Any]:
        data = {column: getattr(order, column) for column in _ORDER_COLUMNS}
        data.update(
            supplier_name=_relation_name(order.supplier),
            destination_name=_relation_name(order.destination),
            carrier_name=_relation_name(order.carrier),
        )
        return data

    def _serialize(self, order: Order, locale: str, include_documents: bool = False) -> Dict[str, Any]:
        data = self._base_fields(order)
        data.update(
            status_badge=status_badge(order.status, locale),
            created_at=order.created_at,
            updated_at=order.updated_at,
            documents=[serialize_document(d, self._storage) for d in order.documents] if include_documents else [],
        )
        return OrderResponseSchema(**data).model_dump(mode="json")

    def _load(self, order_id: str) -> Order:
        order = self._order_repository.get_with_relations(order_id)
        if order is None:
            # get_by_id_or_raise solleva NotFoundException con il formato standard
            return self._order_repository.get_by_id_or_raise(order_id)
        return order

    @cached("orders:list", preset="orders_list")
    async def list_orders(self, search: Optional[str] = None, status: Optional[OrderStatus] = None,
                          page: int = 1, limit: int = 20, locale: Optional[str] = None) -> Dict[str, Any]:
        locale = resolve_locale(locale)
        status_value = status.value if isinstance(status, OrderStatus) else status
        orders = self._order_repository.search(search=search, status=status_value, page=page, limit=limit)
        total = self._order_repository.count(search=search, status=status_value)
        return {
            "items": [self._serialize(order, locale) for order in orders],
            "total": total,
            "page": page,
            "limit": limit,
        }

    @cached("orders:detail", preset="order")
    async def get_order(self, order_id: str, locale: Optional[str] = None) -> Dict[str, Any]:
        order = self._load(order_id)
        return self._serialize(order, resolve_locale(locale), include_documents=True)

    async def get_order_form(self, order_id: str) -> Dict[str, Any]:
        order = self._load(order_id)
        data = self._base_fields(order)
        for field_name in DATE_FIELDS:
            data[field_name] = to_calendar_date(data[field_name])
        data["documents"] = [serialize_document(d, self._storage) for d in order.documents]
        return OrderFormSchema(**data).model_dump(mode="json")

    @cached("form_options", preset="form_options")
    async def get_form_options(self) -> Dict[str, Any]:
        def options(repository):
            return [{"id": option_id, "name": name} for option_id, name in repository.get_options()]

        return {
            "suppliers": options(self._supplier_repository),
            "carriers": options(self._carrier_repository),
            "destinations": options(self._destination_repository),
            "container_types": await self._container_type_service.list_container_types(),
        }

    def _to_columns(self, order_data: OrderSchema) -> Dict[str, Any]:
        data = order_data.model_dump()
        for field_name in _RELATION_FIELDS:
            data[field_name] = str(data[field_name])
        data["status"] = order_data.status.value
        return data

    async def create_order(self, order_data: OrderSchema, locale: Optional[str] = None) -> Dict[str, Any]:
        await self.validate_business_rules(order_data)
        order = self._order_repository.create(Order(**self._to_columns(order_data)))
        await invalidate_entity("order")
        logger.info(f"Ordine creato: {order.id} ({order.reference})")
        return self._serialize(self._load(order.id), resolve_locale(locale), include_documents=True)

    async def update_order(self, order_id: str, order_data: OrderSchema,
                           locale: Optional[str] = None) -> Dict[str, Any]:
        order = self._order_repository.get_by_id_or_raise(order_id)
        await self.validate_business_rules(order_data)

        for field_name, value in self._to_columns(order_data).items():
            setattr(order, field_name, value)

        self._order_repository.update(order)
        await invalidate_entity("order")
        return self._serialize(self._load(order_id), resolve_locale(locale), include_documents=True)

    async def save_order_with_document(self, order_id: Optional[str], order_data: OrderSchema,
                                       filename: Optional[str] = None, content: Optional[bytes] = None,
                                       document_name: Optional[str] = None,
                                       locale: Optional[str] = None) -> Dict[str, Any]:
        """
        Salva l'ordine e poi carica il file allegato.

        Il file viene validato prima della scrittura dell'ordine: un file vuoto
        o troppo grande blocca l'invio. Dopo il salvataggio solo gli errori di
        storage o metadati producono DocumentUploadException.
        """
        if content is not None:
            await self._order_document_service.validate_business_rules(content)

        if order_id:
            saved = await self.update_order(order_id, order_data, locale)
        else:
            saved = await self.create_order(order_data, locale)

        if content is None:
            return saved

        # Ordine e documento non condividono una transazione: l'ordine resta salvato
        try:
            await self._order_document_service.upload_document(saved["id"], filename, content, document_name)
        except BaseApplicationException as e:
            logger.error(f"Caricamento documento fallito per l'ordine {saved['id']}: {e.message}")
            raise DocumentUploadException(saved["id"], e)

        return self._serialize(self._load(saved["id"]), resolve_locale(locale), include_documents=True)

    async def delete_order(self, order_id: str, confirm: bool = False, locale: Optional[str] = None) -> bool:
        order = self._load(order_id)
        if not confirm:
            locale = resolve_locale(locale)
            raise ConfirmationRequiredException(
                f"Confirm the deletion of order '{order.reference}'",
                {
                    "entity_type": "Order",
                    "entity_id": order.id,
                    "reference": order.reference,
                    "supplier_name": _relation_name(order.supplier),
                    "destination_name": _relation_name(order.destination),
                    "status": order.status,
                    "status_label": status_label(order.status, locale),
                }
            )

        paths = [document.file_url for document in order.documents]
        self._order_repository.delete_entity(order)
        await invalidate_entity("order")
        await invalidate_entity("order_document")

        for path in paths:
            if not await self._storage.remove(path):
                logger.warning(f"Documento {path} dell'ordine {order_id} non presente nello storage")
        logger.info(f"Ordine eliminato: {order_id} ({len(paths)} documenti)")
        return True

    async def get_statuses(self, locale: Optional[str] = None) -> List[Dict[str, str]]:
        locale = resolve_locale(locale)
        return [status_badge(status.value, locale) for status in OrderStatus]

    async def validate_business_rules(self, data: Any) -> None:
        await self._container_type_service.validate_container_type(data.container_type)
        for field_name in _RELATION_FIELDS:
            if getattr(data, field_name, None) is None:
                raise ValidationException(
                    f"Field '{field_name}' is required",
                    ErrorCode.REQUIRED_FIELD_MISSING,
                    {"field": field_name}
                )
