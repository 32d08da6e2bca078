"""Vehicle routes. A vehicle is reachable only through a company the user owns."""

from dataclasses import replace
from datetime import datetime
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException

from fleetfin.api.auth import get_current_user_id
from fleetfin.api.deps import get_repository
from fleetfin.api.schemas import VehicleCreate, VehicleResponse, VehicleUpdate
from fleetfin.data.repository import FleetRepository
from fleetfin.models.fleet import Vehicle

router = APIRouter(prefix="/api/v1/vehicles", tags=["vehicles"])


def vehicle_to_response(vehicle: Vehicle) -> VehicleResponse:
    purchase_date = vehicle.purchase_date
    if isinstance(purchase_date, datetime):
        purchase_date = purchase_date.date()
    return VehicleResponse(
        id=vehicle.id,
        company_id=vehicle.company_id,
        type=vehicle.type.value,
        vin=vehicle.vin,
        make=vehicle.make,
        model=vehicle.model,
        year=vehicle.year,
        purchase_price=vehicle.purchase_price,
        purchase_date=purchase_date,
        status=vehicle.status.value,
    )


@router.get("", response_model=list[VehicleResponse])
async def list_vehicles(
    company_id: str | None = None,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    vehicles = await repo.list_vehicles(user_id)
    return [
        vehicle_to_response(v) for v in vehicles
        if company_id is None or v.company_id == company_id
    ]


@router.post("", response_model=VehicleResponse, status_code=201)
async def create_vehicle(
    req: VehicleCreate,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    if not await repo.owns_company(user_id, req.company_id):
        raise HTTPException(status_code=403, detail="Company not found or access denied")

    vehicle = Vehicle(id=str(uuid4()), **req.model_dump())
    return vehicle_to_response(await repo.add_vehicle(vehicle))


@router.put("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(
    vehicle_id: str,
    req: VehicleUpdate,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    vehicle = await repo.get_vehicle(user_id, vehicle_id)
    if vehicle is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")

    updated = replace(vehicle, **req.model_dump(exclude_none=True))
    return vehicle_to_response(await repo.update_vehicle(updated))


@router.delete("/{vehicle_id}")
async def delete_vehicle(
    vehicle_id: str,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    if not await repo.delete_vehicle(user_id, vehicle_id):
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return {"message": "Vehicle deleted"}
