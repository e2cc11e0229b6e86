# File: src/parking_capacity/domain/models.py
"""
Domain Models for the Parking Capacity Service

This module contains:
1. Enums: VehicleType, the closed set of vehicle categories
2. Value Objects: EntityInfo (identity + timestamps), FloorAvailability
3. Entities: Vehicle, ParkingSlot, Floor, Building
4. Capacity helpers: plain functions that aggregate slot occupancy

The hierarchy Building -> Floor -> ParkingSlot is built once and never
changes shape; only slot occupancy mutates.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Iterable, Tuple
from datetime import datetime
from enum import Enum


# ============================================================================
# DOMAIN ERRORS
# ============================================================================

class SlotOccupiedError(ValueError):
    """Raised when a vehicle is parked in a slot that is already taken"""
    pass


class VehicleTypeMismatchError(ValueError):
    """Raised when a vehicle is parked in a slot made for another type"""
    pass


# ============================================================================
# ENUMS FOR DOMAIN TYPES
# ============================================================================

class VehicleType(str, Enum):
    """
    Enumeration of vehicle types
    Each slot is built for exactly one of these
    """
    TWO_WHEELER = "TWO_WHEELER"     # Motorcycles, scooters
    FOUR_WHEELER = "FOUR_WHEELER"   # Cars, SUVs

    @property
    def slot_prefix(self) -> str:
        """Short code used inside slot identifiers"""
        prefixes = {
            VehicleType.TWO_WHEELER: "TW",
            VehicleType.FOUR_WHEELER: "FW",
        }
        return prefixes[self]

    @property
    def slots_per_floor(self) -> int:
        """Number of slots of this type on every floor"""
        counts = {
            VehicleType.TWO_WHEELER: 50,
            VehicleType.FOUR_WHEELER: 30,
        }
        return counts[self]


# Fixed shape of the parking hierarchy
BUILDING_COUNT = 4
FLOORS_PER_BUILDING = 2


def make_building_id(number: int) -> str:
    return f"B{number}"


def make_floor_id(number: int) -> str:
    return f"F{number}"


def make_slot_id(building_id: str, floor_id: str, vehicle_type: VehicleType, number: int) -> str:
    """Build a slot identifier such as ``B1-F2-TW-07``"""
    return f"{building_id}-{floor_id}-{vehicle_type.slot_prefix}-{number:02d}"


# ============================================================================
# VALUE OBJECTS
# ============================================================================

@dataclass
class EntityInfo:
    """
    Value Object: identity and audit timestamps embedded by every entity
    """
    id: str
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def touch(self) -> None:
        """Mark the owning entity as modified now"""
        self.updated_at = datetime.now()


@dataclass(frozen=True)
class FloorAvailability:
    """
    Value Object: unoccupied slots of one floor, split by vehicle type
    """
    building_id: str
    floor_id: str
    available_two_wheeler_slots: Tuple[str, ...] = ()
    available_four_wheeler_slots: Tuple[str, ...] = ()

    @property
    def total_available_two_wheeler_slots(self) -> int:
        return len(self.available_two_wheeler_slots)

    @property
    def total_available_four_wheeler_slots(self) -> int:
        return len(self.available_four_wheeler_slots)


# ============================================================================
# DOMAIN ENTITIES
# ============================================================================

class Vehicle:
    """
    Entity: a vehicle parked in a slot
    Identified by its registration number; has no lifecycle of its own
    """

    def __init__(
        self,
        registration_number: str,
        vehicle_type: VehicleType,
        info: Optional[EntityInfo] = None
    ):
        if not registration_number or not registration_number.strip():
            raise ValueError("Registration number cannot be empty")

        self.registration_number = registration_number.strip()
        self.vehicle_type = VehicleType(vehicle_type)
        self.info = info or EntityInfo(id=self.registration_number)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "registration_number": self.registration_number,
            "vehicle_type": self.vehicle_type.value,
            "created_at": self.info.created_at.isoformat(),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vehicle):
            return False
        return (self.registration_number == other.registration_number
                and self.vehicle_type == other.vehicle_type)

    def __hash__(self) -> int:
        return hash((self.registration_number, self.vehicle_type))

    def __repr__(self) -> str:
        return f"Vehicle(registration_number={self.registration_number!r}, vehicle_type={self.vehicle_type.value})"


class ParkingSlot:
    """
    Entity: a single parking space built for one vehicle type

    The slot is occupied exactly when a vehicle is attached to it, so the
    occupied flag is derived from ``parked_vehicle`` rather than stored.
    """

    def __init__(
        self,
        slot_id: str,
        building_id: str,
        floor_id: str,
        vehicle_type: VehicleType,
        parked_vehicle: Optional[Vehicle] = None,
        info: Optional[EntityInfo] = None
    ):
        self.info = info or EntityInfo(id=slot_id)
        self.building_id = building_id
        self.floor_id = floor_id
        self._vehicle_type = VehicleType(vehicle_type)
        self._parked_vehicle: Optional[Vehicle] = None

        if parked_vehicle is not None:
            self.occupy(parked_vehicle)

    @property
    def id(self) -> str:
        return self.info.id

    @property
    def vehicle_type(self) -> VehicleType:
        """Vehicle type the slot was built for; fixed at creation"""
        return self._vehicle_type

    @property
    def parked_vehicle(self) -> Optional[Vehicle]:
        return self._parked_vehicle

    @property
    def occupied(self) -> bool:
        return self._parked_vehicle is not None

    def occupy(self, vehicle: Vehicle) -> None:
        """
        Park a vehicle in this slot

        Raises:
            SlotOccupiedError: if a vehicle is already parked here
            VehicleTypeMismatchError: if the vehicle type does not match the slot
        """
        if self.occupied:
            raise SlotOccupiedError(f"Slot {self.id} is already occupied")

        if vehicle.vehicle_type != self._vehicle_type:
            raise VehicleTypeMismatchError(
                f"Slot {self.id} accepts {self._vehicle_type.value}, "
                f"got {vehicle.vehicle_type.value}"
            )

        self._parked_vehicle = vehicle
        self.info.touch()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "id": self.id,
            "building_id": self.building_id,
            "floor_id": self.floor_id,
            "vehicle_type": self._vehicle_type.value,
            "occupied": self.occupied,
            "parked_vehicle": self._parked_vehicle.to_dict() if self._parked_vehicle else None,
        }

    def __eq__(self, other: object) -> bool:
        """Slots are equal if they have the same identifier"""
        if not isinstance(other, ParkingSlot):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"ParkingSlot(id={self.id}, occupied={self.occupied})"


class Floor:
    """
    Entity: one level of a building holding an ordered list of slots
    """

    def __init__(
        self,
        floor_id: str,
        building_id: str,
        slots: Optional[List[ParkingSlot]] = None,
        info: Optional[EntityInfo] = None
    ):
        self.floor_id = floor_id
        self.building_id = building_id
        self.slots: List[ParkingSlot] = slots if slots is not None else []
        self.info = info or EntityInfo(id=f"{building_id}-{floor_id}")

    @property
    def id(self) -> str:
        return self.info.id

    @property
    def total_capacity(self) -> int:
        return len(self.slots)

    @property
    def available_capacity(self) -> int:
        return count_available(self.slots)

    def slots_of_type(self, vehicle_type: VehicleType) -> List[ParkingSlot]:
        return [slot for slot in self.slots if slot.vehicle_type == vehicle_type]

    def available_slots(self, vehicle_type: VehicleType) -> List[ParkingSlot]:
        """Unoccupied slots of the given type, in slot order"""
        return [slot for slot in self.slots_of_type(vehicle_type) if not slot.occupied]

    def availability(self) -> FloorAvailability:
        """Build the availability summary of this floor"""
        return FloorAvailability(
            building_id=self.building_id,
            floor_id=self.floor_id,
            available_two_wheeler_slots=tuple(
                slot.id for slot in self.available_slots(VehicleType.TWO_WHEELER)
            ),
            available_four_wheeler_slots=tuple(
                slot.id for slot in self.available_slots(VehicleType.FOUR_WHEELER)
            ),
        )

    def __repr__(self) -> str:
        return f"Floor(id={self.id}, slots={self.total_capacity})"


class Building:
    """
    Entity: a parking building made of floors
    Totals are always computed from the floors, never stored
    """

    def __init__(
        self,
        building_id: str,
        floors: Optional[List[Floor]] = None,
        info: Optional[EntityInfo] = None
    ):
        self.building_id = building_id
        self.floors: List[Floor] = floors if floors is not None else []
        self.info = info or EntityInfo(id=building_id)

    @property
    def id(self) -> str:
        return self.info.id

    @property
    def total_capacity(self) -> int:
        return sum(floor.total_capacity for floor in self.floors)

    @property
    def available_capacity(self) -> int:
        return sum(floor.available_capacity for floor in self.floors)

    def find_floor(self, floor_id: str) -> Optional[Floor]:
        for floor in self.floors:
            if floor.floor_id == floor_id:
                return floor
        return None

    def __repr__(self) -> str:
        return f"Building(id={self.id}, floors={len(self.floors)})"


# ============================================================================
# CAPACITY HELPERS
# ============================================================================

def count_available(slots: Iterable[ParkingSlot], vehicle_type: Optional[VehicleType] = None) -> int:
    """
    Count unoccupied slots, optionally restricted to one vehicle type
    """
    return sum(
        1 for slot in slots
        if not slot.occupied and (vehicle_type is None or slot.vehicle_type == vehicle_type)
    )


def available_by_type(floor: Floor) -> Dict[VehicleType, int]:
    """Available slot count of a floor for every vehicle type, zeros included"""
    return {vehicle_type: count_available(floor.slots, vehicle_type) for vehicle_type in VehicleType}
