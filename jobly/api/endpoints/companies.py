"""
Company endpoints.

Anyone can browse companies; creating, updating and deleting them is
admin only.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin, query_filters
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyFilter,
    CompanyListResponse,
    CompanyUpdateRequest,
)
from jobly.schemas.job import DeletedResponse

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    company = company_crud.create(db, request)
    logger.info(f"{admin['username']} created company {company['handle']}")
    return {"company": company}


@router.get("", response_model=CompanyListResponse)
def list_companies(
    filters: dict = Depends(query_filters(CompanyFilter)),
    db: Session = Depends(get_db),
):
    """
    List companies, optionally filtered.

    Query parameters:
        name: Case-insensitive substring of the name
        minEmployees / maxEmployees: Bounds on the number of employees
    """
    if filters:
        companies = company_crud.filter_by(db, filters)
    else:
        companies = company_crud.find_all(db)
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company and its jobs."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    company = company_crud.update(db, handle, request.model_dump(by_alias=True, exclude_unset=True))
    logger.info(f"{admin['username']} updated company {handle}")
    return {"company": company}


@router.delete("/{handle}", response_model=DeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    company_crud.remove(db, handle)
    logger.info(f"{admin['username']} deleted company {handle}")
    return {"deleted": handle}
