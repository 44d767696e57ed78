from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from logitrack.schemas.common_schema import UTCDateTime
from logitrack.services.core.tool import blank_to_none


class ContactSchema(BaseModel):
    """
        Schema di validazione per fornitori, vettori e destinazioni.

        Attributes:
            name (str): Obbligatorio; gli spazi iniziali e finali vengono rimossi.
            address, country, phone (str): Facoltativi; vuoti diventano None.
            email (EmailStr): Facoltativa; se presente deve essere un indirizzo valido.
    """
    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    country: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)

    model_config = ConfigDict(str_strip_whitespace=True, extra='forbid')

    @field_validator('address', 'country', 'email', 'phone', mode='before')
    @classmethod
    def empty_to_none(cls, value):
        return blank_to_none(value)


class ContactResponseSchema(BaseModel):
    id: str
    name: str
    address: Optional[str] = None
    country: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class AllContactsResponseSchema(BaseModel):
    items: list[ContactResponseSchema]
    total: int
    page: int
    limit: int
