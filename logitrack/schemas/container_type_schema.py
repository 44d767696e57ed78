from pydantic import BaseModel, ConfigDict, Field


class ContainerTypeSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)

    model_config = ConfigDict(str_strip_whitespace=True, extra='forbid')


class ContainerTypeResponseSchema(BaseModel):
    name: str

    model_config = ConfigDict(from_attributes=True)
