from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., alias="companyHandle", min_length=1, max_length=25)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class JobUpdateRequest(BaseModel):
    """
    Schema for a partial job update.

    A job's id and company cannot be changed.
    """
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)

    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        """Salary and equity may be cleared; title may not."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class JobFilter(BaseModel):
    """
    Query-string filters for job search.

    Unknown parameters are kept so the SQL builder can decide whether
    anything usable was supplied.
    """
    title: Optional[str] = None
    min_salary: Optional[int] = Field(None, alias="minSalary", ge=0)
    has_equity: Optional[bool] = Field(None, alias="hasEquity")

    model_config = ConfigDict(extra="allow")


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str = Field(..., alias="companyHandle")

    model_config = ConfigDict(populate_by_name=True)


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListResponse(BaseModel):
    jobs: List[JobResponse]


class CompanyJobResponse(BaseModel):
    """A job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None


class DeletedResponse(BaseModel):
    deleted: str


class AppliedResponse(BaseModel):
    applied: int
