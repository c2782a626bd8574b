from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class SignatureCheckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    filename: str
    extension: str
    header: Optional[str] = Field(
        None,
        description="Uppercase hex of the leading bytes; null when the file could not be read",
    )
    candidate_types: list[str] = Field(default_factory=list)
    is_valid_extension: bool
    is_valid_header: bool
    is_consistent: bool
    error: Optional[str] = None


class HeaderLookupResponse(BaseModel):
    header: str
    types: list[str]


class ExtensionResponse(BaseModel):
    extension: str
    headers: list[str]
    skip_check: bool = Field(
        description="True when the type has no reliable signature and is never rejected",
    )


class TypeListResponse(BaseModel):
    total: int = Field(ge=0)
    types: list[ExtensionResponse]
