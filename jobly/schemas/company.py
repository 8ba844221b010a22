from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from jobly.schemas.job import CompanyJobResponse


class CompanyCreateRequest(BaseModel):
    """Schema for creating a company"""
    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0)
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class CompanyUpdateRequest(BaseModel):
    """Schema for a partial company update. The handle cannot change."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0)
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("name", "description")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class CompanyFilter(BaseModel):
    """Query-string filters for company search"""
    name: Optional[str] = None
    min_employees: Optional[int] = Field(None, alias="minEmployees", ge=0)
    max_employees: Optional[int] = Field(None, alias="maxEmployees", ge=0)

    model_config = ConfigDict(extra="allow")


class CompanyResponse(BaseModel):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    model_config = ConfigDict(populate_by_name=True)


class CompanyDetailResponse(CompanyResponse):
    """A company with its jobs"""
    jobs: List[CompanyJobResponse] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetailResponse


class CompanyListResponse(BaseModel):
    companies: List[CompanyResponse]
