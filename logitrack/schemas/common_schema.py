from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel

from logitrack.services.core.tool import ensure_utc

# Datetime sempre serializzato come istante UTC (suffisso "Z")
UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]


class OptionSchema(BaseModel):
    """Coppia id/nome per i menu a tendina"""
    id: str
    name: str


class MessageResponseSchema(BaseModel):
    message: str
