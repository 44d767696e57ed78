from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from logitrack.models.order import OrderStatus
from logitrack.schemas.common_schema import OptionSchema, UTCDateTime
from logitrack.schemas.order_document_schema import OrderDocumentResponseSchema
from logitrack.services.core.tool import blank_to_none, normalize_datetime

DATE_FIELDS = (
    'order_date', 'expected_start_date', 'initial_payment_date', 'final_payment_date', 'etd', 'eta', 'ata',
)


class OrderSchema(BaseModel):
    """
        Schema di validazione per creazione e modifica di un ordine.

        Le relazioni devono essere UUID validi e vengono verificate prima di
        qualunque accesso al database. Tutte le date vengono normalizzate in un
        istante UTC; una stringa vuota equivale a data assente.
        ``expected_start_date`` è accettato anche come ``expected_shipping_date``.
    """
    reference: str = Field(..., min_length=1, max_length=100)
    supplier_id: UUID
    destination_id: UUID
    carrier_id: UUID
    product_description: Optional[str] = None
    container_type: str = Field(..., min_length=1, max_length=50)
    container_reference: Optional[str] = Field(None, max_length=100)
    transport_price: float = Field(..., ge=0)
    order_value: float = Field(..., ge=0)
    status: OrderStatus = OrderStatus.PENDING
    order_date: UTCDateTime
    expected_start_date: UTCDateTime = Field(
        ..., validation_alias=AliasChoices('expected_start_date', 'expected_shipping_date')
    )
    initial_payment_date: Optional[UTCDateTime] = None
    initial_payment_amount: Optional[float] = Field(None, ge=0)
    final_payment_date: Optional[UTCDateTime] = None
    final_payment_amount: Optional[float] = Field(None, ge=0)
    etd: Optional[UTCDateTime] = None
    eta: Optional[UTCDateTime] = None
    ata: Optional[UTCDateTime] = None

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, extra='ignore')

    @field_validator(*DATE_FIELDS, mode='before')
    @classmethod
    def normalize_dates(cls, value):
        return normalize_datetime(value)

    @field_validator('product_description', 'container_reference', 'initial_payment_amount', 'final_payment_amount',
                     mode='before')
    @classmethod
    def empty_to_none(cls, value):
        return blank_to_none(value)


class StatusBadgeSchema(BaseModel):
    value: OrderStatus
    label: str
    color: str


class OrderResponseSchema(BaseModel):
    id: str
    reference: str
    supplier_id: str
    supplier_name: Optional[str] = None
    destination_id: str
    destination_name: Optional[str] = None
    carrier_id: str
    carrier_name: Optional[str] = None
    product_description: Optional[str] = None
    container_type: str
    container_reference: Optional[str] = None
    transport_price: float
    order_value: float
    status: OrderStatus
    status_badge: StatusBadgeSchema
    order_date: UTCDateTime
    expected_start_date: UTCDateTime
    initial_payment_date: Optional[UTCDateTime] = None
    initial_payment_amount: Optional[float] = None
    final_payment_date: Optional[UTCDateTime] = None
    final_payment_amount: Optional[float] = None
    etd: Optional[UTCDateTime] = None
    eta: Optional[UTCDateTime] = None
    ata: Optional[UTCDateTime] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime
    documents: List[OrderDocumentResponseSchema] = []


class AllOrdersResponseSchema(BaseModel):
    items: list[OrderResponseSchema]
    total: int
    page: int
    limit: int


class OrderFormSchema(BaseModel):
    """Vista del form: le date sono ridotte al giorno di calendario"""
    id: str
    reference: str
    supplier_id: str
    supplier_name: Optional[str] = None
    destination_id: str
    destination_name: Optional[str] = None
    carrier_id: str
    carrier_name: Optional[str] = None
    product_description: Optional[str] = None
    container_type: str
    container_reference: Optional[str] = None
    transport_price: float
    order_value: float
    status: OrderStatus
    order_date: date
    expected_start_date: date
    initial_payment_date: Optional[date] = None
    initial_payment_amount: Optional[float] = None
    final_payment_date: Optional[date] = None
    final_payment_amount: Optional[float] = None
    etd: Optional[date] = None
    eta: Optional[date] = None
    ata: Optional[date] = None
    documents: List[OrderDocumentResponseSchema] = []


class FormOptionsSchema(BaseModel):
    suppliers: List[OptionSchema]
    carriers: List[OptionSchema]
    destinations: List[OptionSchema]
    container_types: List[str]
