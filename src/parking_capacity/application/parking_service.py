# File: src/parking_capacity/application/parking_service.py
"""
Parking Capacity Application Service

Implements the use cases of the service on top of the parking repository:
1. Capacity overview across all buildings and floors
2. Status of a single slot
3. Parking a vehicle in the first free slot of its type
4. Availability of a single floor

"Not found" and "no capacity" are ordinary results carried in the
response DTOs; exceptions are reserved for broken invariants.
"""

from typing import List, Optional, Protocol
import logging

from ..domain.models import VehicleType, available_by_type
from ..infrastructure.config import ParkingSettings
from ..infrastructure.factories import VehicleFactory
from ..infrastructure.repositories import ParkingRepository, InMemoryParkingRepository
from .dtos import (
    ParkingRequestDTO, ParkingResponseDTO,
    BuildingCapacityDTO, FloorCapacityDTO, FloorAvailabilityDTO
)


MESSAGE_OCCUPIED = "Occupied"
MESSAGE_AVAILABLE = "Available"
MESSAGE_SLOT_NOT_FOUND = "Slot not found"
MESSAGE_PARKED = "Vehicle parked successfully"
MESSAGE_NO_SLOTS = "No available slots for {vehicle_type}"


# ============================================================================
# SERVICE INTERFACE
# ============================================================================

class IParkingService(Protocol):
    """Interface for parking service operations"""

    def check_capacity(self) -> List[BuildingCapacityDTO]:
        ...

    def check_slot_status(self, slot_id: str) -> ParkingResponseDTO:
        ...

    def park_vehicle(self, request: ParkingRequestDTO) -> ParkingResponseDTO:
        ...

    def get_floor_availability(self, building_id: str, floor_id: str) -> Optional[FloorAvailabilityDTO]:
        ...


# ============================================================================
# EXCEPTIONS
# ============================================================================

class ParkingServiceError(Exception):
    """Base exception for parking service errors"""
    pass


class SlotAllocationError(ParkingServiceError):
    """Exception for slot allocation errors"""
    pass


# ============================================================================
# MAIN PARKING SERVICE
# ============================================================================

class ParkingService:
    """
    Main application service for parking capacity

    All mutating work happens inside ``repository.transaction()`` so that
    concurrent requests cannot be handed the same slot.
    """

    def __init__(
        self,
        repository: ParkingRepository,
        vehicle_factory: Optional[VehicleFactory] = None
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.repository = repository
        self.vehicle_factory = vehicle_factory or VehicleFactory()
        self.logger.info("ParkingService initialized")

    def check_capacity(self) -> List[BuildingCapacityDTO]:
        """
        Available slot count per vehicle type for every floor of every building

        Buildings and floors keep the repository's iteration order.
        """
        capacity = []
        for building in self.repository.get_all_buildings().values():
            capacity.append(BuildingCapacityDTO(
                building_id=building.building_id,
                floors=[
                    FloorCapacityDTO(
                        floor_id=floor.floor_id,
                        available_slots=available_by_type(floor)
                    )
                    for floor in building.floors
                ]
            ))
        return capacity

    def check_slot_status(self, slot_id: str) -> ParkingResponseDTO:
        """Report whether a slot is occupied or available"""
        slot = self.repository.find_slot_by_id(slot_id)
        if slot is None:
            self.logger.warning(f"Slot status requested for unknown slot {slot_id}")
            return ParkingResponseDTO(success=False, message=MESSAGE_SLOT_NOT_FOUND)

        return ParkingResponseDTO(
            slot_id=slot.id,
            success=True,
            message=MESSAGE_OCCUPIED if slot.occupied else MESSAGE_AVAILABLE
        )

    def park_vehicle(self, request: ParkingRequestDTO) -> ParkingResponseDTO:
        """
        Park a vehicle in the first available slot of its type

        Use Case: Vehicle Entry
        1. Find the first available slot of the requested type
           (hierarchy order, not random)
        2. Attach a vehicle built from the request
        3. Persist the slot

        Raises:
            SlotAllocationError: if the chosen slot rejects the vehicle
        """
        vehicle_type = VehicleType(request.vehicle_type)
        self.logger.info(
            f"Processing parking request for {request.registration_number} ({vehicle_type.value})"
        )

        with self.repository.transaction():
            slot = self.repository.find_first_available_slot(vehicle_type)
            if slot is None:
                self.logger.warning(f"No available slots for {vehicle_type.value}")
                return ParkingResponseDTO(
                    success=False,
                    message=MESSAGE_NO_SLOTS.format(vehicle_type=vehicle_type.value)
                )

            vehicle = self.vehicle_factory.create(request.registration_number, vehicle_type)
            try:
                slot.occupy(vehicle)
            except ValueError as e:
                self.logger.error(f"Allocation of slot {slot.id} failed: {e}")
                raise SlotAllocationError(str(e)) from e

            self.repository.update_slot(slot)

        self.logger.info(f"Parked {vehicle.registration_number} in slot {slot.id}")
        return ParkingResponseDTO(slot_id=slot.id, success=True, message=MESSAGE_PARKED)

    def get_floor_availability(self, building_id: str, floor_id: str) -> Optional[FloorAvailabilityDTO]:
        """Available slot ids of one floor, or None if the floor does not exist"""
        availability = self.repository.get_floor_availability(building_id, floor_id)
        if availability is None:
            self.logger.warning(f"Availability requested for unknown floor {building_id}/{floor_id}")
            return None
        return FloorAvailabilityDTO.from_domain(availability)


# ============================================================================
# SERVICE FACTORY
# ============================================================================

class ParkingServiceFactory:
    """Factory for creating parking service instances"""

    @staticmethod
    def create_default_service() -> ParkingService:
        """Create a service over a freshly seeded in-memory store"""
        return ParkingService(InMemoryParkingRepository())

    @staticmethod
    def create_service_with_config(settings: ParkingSettings) -> ParkingService:
        """Create a service whose store is seeded according to the settings"""
        return ParkingService(InMemoryParkingRepository(seeding=settings.seeding))
