from pydantic import BaseModel, ConfigDict, Field

from logitrack.schemas.common_schema import UTCDateTime


class OrderDocumentRenameSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)

    model_config = ConfigDict(str_strip_whitespace=True, extra='forbid')


class OrderDocumentResponseSchema(BaseModel):
    """``file_url`` è il path nello storage; ``public_url`` viene risolto a ogni lettura"""
    id: str
    order_id: str
    name: str
    file_url: str
    public_url: str
    created_at: UTCDateTime
