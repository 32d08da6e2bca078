"""Company routes. Companies belong to the authenticated user."""

from dataclasses import replace
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException

from fleetfin.api.auth import get_current_user_id
from fleetfin.api.deps import get_repository
from fleetfin.api.schemas import CompanyCreate, CompanyResponse, CompanyUpdate
from fleetfin.data.repository import FleetRepository
from fleetfin.models.fleet import Company

router = APIRouter(prefix="/api/v1/companies", tags=["companies"])


@router.get("", response_model=list[CompanyResponse])
async def list_companies(
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    companies = await repo.list_companies(user_id)
    return [CompanyResponse.model_validate(c, from_attributes=True) for c in companies]


@router.post("", response_model=CompanyResponse, status_code=201)
async def create_company(
    req: CompanyCreate,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    company = Company(id=str(uuid4()), name=req.name, ein=req.ein, address=req.address)
    stored = await repo.add_company(user_id, company)
    return CompanyResponse.model_validate(stored, from_attributes=True)


@router.put("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: str,
    req: CompanyUpdate,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    company = await repo.get_company(user_id, company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")

    updated = await repo.update_company(replace(company, **req.model_dump(exclude_none=True)))
    return CompanyResponse.model_validate(updated, from_attributes=True)


@router.delete("/{company_id}")
async def delete_company(
    company_id: str,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    """Delete a company along with its vehicles, loans and payment history."""
    if not await repo.delete_company(user_id, company_id):
        raise HTTPException(status_code=404, detail="Company not found")
    return {"message": "Company deleted"}
