# File: src/parking_capacity/infrastructure/factories.py
"""
Factories for the Parking Capacity Service

1. ParkingStructureFactory - builds the fixed Building -> Floor -> Slot tree
2. VehicleFactory - builds vehicles from requests and synthetic seed vehicles

Random choices go through an injected ``random.Random`` so that seeding can
be reproduced from a fixed seed.
"""

from typing import Optional, List, Union
import logging
import random

from ..domain.models import (
    Vehicle, ParkingSlot, Floor, Building, VehicleType,
    BUILDING_COUNT, FLOORS_PER_BUILDING,
    make_building_id, make_floor_id, make_slot_id
)


# ============================================================================
# STRUCTURE FACTORY
# ============================================================================

class ParkingStructureFactory:
    """Factory for creating the static parking hierarchy"""

    def __init__(
        self,
        building_count: int = BUILDING_COUNT,
        floors_per_building: int = FLOORS_PER_BUILDING
    ):
        self.building_count = building_count
        self.floors_per_building = floors_per_building
        self._logger = logging.getLogger(self.__class__.__name__)

    def create_slot(
        self,
        building_id: str,
        floor_id: str,
        vehicle_type: VehicleType,
        number: int
    ) -> ParkingSlot:
        """Create an unoccupied slot"""
        return ParkingSlot(
            slot_id=make_slot_id(building_id, floor_id, vehicle_type, number),
            building_id=building_id,
            floor_id=floor_id,
            vehicle_type=vehicle_type
        )

    def create_floor(self, building_id: str, floor_number: int) -> Floor:
        """
        Create a floor with all of its slots

        Slot order: every TWO_WHEELER slot 1..N, then every FOUR_WHEELER slot 1..M
        """
        floor_id = make_floor_id(floor_number)
        floor = Floor(floor_id=floor_id, building_id=building_id)

        for vehicle_type in (VehicleType.TWO_WHEELER, VehicleType.FOUR_WHEELER):
            for number in range(1, vehicle_type.slots_per_floor + 1):
                floor.slots.append(self.create_slot(building_id, floor_id, vehicle_type, number))

        return floor

    def create_building(self, building_number: int) -> Building:
        building = Building(building_id=make_building_id(building_number))
        for floor_number in range(1, self.floors_per_building + 1):
            building.floors.append(self.create_floor(building.building_id, floor_number))
        return building

    def create_all(self) -> List[Building]:
        """Create every building in numeric order"""
        buildings = [
            self.create_building(number)
            for number in range(1, self.building_count + 1)
        ]
        self._logger.debug(
            f"Created {len(buildings)} buildings with "
            f"{sum(b.total_capacity for b in buildings)} slots"
        )
        return buildings


# ============================================================================
# VEHICLE FACTORY
# ============================================================================

class VehicleFactory:
    """Factory for creating Vehicle domain objects"""

    TOKEN_LENGTH = 8

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def create(self, registration_number: str, vehicle_type: Union[VehicleType, str]) -> Vehicle:
        """Create a vehicle from caller-supplied data"""
        if isinstance(vehicle_type, str):
            vehicle_type = VehicleType(vehicle_type)
        return Vehicle(registration_number=registration_number, vehicle_type=vehicle_type)

    def create_synthetic(self, vehicle_type: VehicleType) -> Vehicle:
        """
        Create a placeholder vehicle for startup seeding

        Registration number is the type prefix plus an 8 character hex token,
        e.g. ``TW-3f9a01bc``.
        """
        token = format(self._rng.getrandbits(4 * self.TOKEN_LENGTH), f"0{self.TOKEN_LENGTH}x")
        return self.create(f"{vehicle_type.slot_prefix}-{token}", vehicle_type)
