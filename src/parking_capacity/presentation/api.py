# File: src/parking_capacity/presentation/api.py
"""
HTTP interface of the Parking Capacity Service

Routes under /api/parking:
- GET  /capacity          - available slots per building, floor and vehicle type
- GET  /slot/{slot_id}    - occupancy of one slot
- POST /park              - park a vehicle in the first free slot of its type
- POST /availability      - free slot ids of one floor (404 if unknown)

Handlers only translate between HTTP and the application service.
"""

from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from ..application.dtos import (
    ParkingRequestDTO, ParkingResponseDTO, FloorAvailabilityRequestDTO,
    FloorAvailabilityDTO, BuildingCapacityDTO, ErrorResponseDTO
)
from ..application.parking_service import (
    IParkingService, ParkingServiceError, ParkingServiceFactory
)
from ..infrastructure.config import ParkingSettings


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/parking", tags=["Parking Management"])


def get_parking_service(request: Request) -> IParkingService:
    """Dependency returning the service bound to the running app"""
    return request.app.state.parking_service


# ============================================================================
# PARKING ROUTES
# ============================================================================

@router.get(
    "/capacity",
    response_model=List[BuildingCapacityDTO],
    summary="Check parking capacity",
    description="Returns available slots for each building and floor"
)
def check_capacity(service: IParkingService = Depends(get_parking_service)):
    return service.check_capacity()


@router.get(
    "/slot/{slot_id}",
    response_model=ParkingResponseDTO,
    summary="Check slot status",
    description="Check if a specific slot is occupied or available"
)
def check_slot_status(slot_id: str, service: IParkingService = Depends(get_parking_service)):
    return service.check_slot_status(slot_id)


@router.post(
    "/park",
    response_model=ParkingResponseDTO,
    summary="Park a vehicle",
    description="Park a vehicle in an available slot"
)
def park_vehicle(request: ParkingRequestDTO, service: IParkingService = Depends(get_parking_service)):
    return service.park_vehicle(request)


@router.post(
    "/availability",
    response_model=FloorAvailabilityDTO,
    summary="Get floor availability",
    description="Get available parking slots for a specific building floor",
    responses={404: {"description": "Building or floor not found"}}
)
def get_floor_availability(
    request: FloorAvailabilityRequestDTO,
    service: IParkingService = Depends(get_parking_service)
):
    availability = service.get_floor_availability(request.building_id, request.floor_id)
    if availability is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return availability


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

def handle_service_error(request: Request, exc: ParkingServiceError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    error = ErrorResponseDTO(error=str(exc), error_code=exc.__class__.__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error.to_dict()
    )


def create_app(
    service: Optional[IParkingService] = None,
    settings: Optional[ParkingSettings] = None
) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        service: Service to expose. Created from ``settings`` when omitted.
        settings: Used only when no service is given; defaults apply otherwise.
    """
    if service is None:
        service = ParkingServiceFactory.create_service_with_config(settings or ParkingSettings())

    app = FastAPI(
        title="Parking Capacity Service",
        description="Tracks parking slot occupancy across buildings and floors",
        version="1.0.0"
    )
    app.state.parking_service = service
    app.include_router(router)
    app.add_exception_handler(ParkingServiceError, handle_service_error)

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok"}

    return app
