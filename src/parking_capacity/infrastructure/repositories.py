# File: src/parking_capacity/infrastructure/repositories.py
"""
Repository Pattern Implementation for the Parking Capacity Service

The repository owns the canonical in-memory state: four buildings, two
floors each, eighty slots per floor. It answers structural and occupancy
queries and persists slot updates.

Thread safety:
- Every public method takes a single re-entrant store lock.
- Reads hand out deep copies, so callers never hold live state.
- ``transaction()`` holds the lock across several calls, which is how the
  service makes "find available slot + occupy + update" atomic.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Iterator
from contextlib import contextmanager
import copy
import logging
import random
import threading

from ..domain.models import (
    Building, Floor, ParkingSlot, VehicleType, FloorAvailability
)
from .config import SeedingSettings
from .factories import ParkingStructureFactory, VehicleFactory


# ============================================================================
# REPOSITORY INTERFACE
# ============================================================================

class ParkingRepository(ABC):
    """Interface of the parking store"""

    @abstractmethod
    def get_all_buildings(self) -> Dict[str, Building]:
        """Snapshot of every building keyed by building id"""
        pass

    @abstractmethod
    def find_slot_by_id(self, slot_id: str) -> Optional[ParkingSlot]:
        pass

    @abstractmethod
    def find_available_slots(self, vehicle_type: VehicleType) -> List[ParkingSlot]:
        """Unoccupied slots of one type in hierarchy order"""
        pass

    @abstractmethod
    def find_slots_by_building_and_floor(self, building_id: str, floor_id: str) -> List[ParkingSlot]:
        pass

    @abstractmethod
    def update_slot(self, slot: ParkingSlot) -> None:
        """Replace the stored slot with the same id; no-op if it cannot be located"""
        pass

    @abstractmethod
    def get_floor_availability(self, building_id: str, floor_id: str) -> Optional[FloorAvailability]:
        pass

    @abstractmethod
    def get_all_slots(self) -> List[ParkingSlot]:
        pass

    @abstractmethod
    def find_all_floors(self) -> List[Floor]:
        pass

    @abstractmethod
    def transaction(self):
        """Context manager holding exclusive access to the store"""
        pass

    def find_first_available_slot(self, vehicle_type: VehicleType) -> Optional[ParkingSlot]:
        """First unoccupied slot of one type in hierarchy order, or None"""
        available = self.find_available_slots(vehicle_type)
        return available[0] if available else None

    def save(self, slot: ParkingSlot) -> ParkingSlot:
        """Persist a slot and return it"""
        self.update_slot(slot)
        return slot


# ============================================================================
# IN-MEMORY REPOSITORY
# ============================================================================

class InMemoryParkingRepository(ParkingRepository):
    """
    In-memory parking store

    Built once at construction: the fixed hierarchy first, then (unless
    disabled) a random occupancy pattern drawn independently for every floor.
    """

    def __init__(
        self,
        seeding: Optional[SeedingSettings] = None,
        structure_factory: Optional[ParkingStructureFactory] = None,
        rng: Optional[random.Random] = None
    ):
        self._logger = logging.getLogger(self.__class__.__name__)
        self._lock = threading.RLock()

        self.seeding = seeding or SeedingSettings()
        self._rng = rng or random.Random(self.seeding.random_seed)
        self._structure_factory = structure_factory or ParkingStructureFactory()
        self._vehicle_factory = VehicleFactory(self._rng)

        self._buildings: Dict[str, Building] = {}   # building_id -> Building
        self._slots: Dict[str, ParkingSlot] = {}    # slot_id -> ParkingSlot

        self._initialize()

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def _initialize(self) -> None:
        for building in self._structure_factory.create_all():
            self._buildings[building.building_id] = building
            for floor in building.floors:
                for slot in floor.slots:
                    self._slots[slot.id] = slot

        self._logger.info(
            f"Initialized {len(self._buildings)} buildings with {len(self._slots)} slots"
        )

        if self.seeding.enabled:
            self._populate_random_slots()

    def _populate_random_slots(self) -> None:
        """Occupy a random sample of slots on every floor with synthetic vehicles"""
        occupied = 0
        for floor in self._iter_floors():
            for vehicle_type in VehicleType:
                low, high = self.seeding.range_for(vehicle_type)
                count = self._rng.randint(low, high)
                for slot in self._rng.sample(floor.slots_of_type(vehicle_type), count):
                    slot.occupy(self._vehicle_factory.create_synthetic(vehicle_type))
                occupied += count
                self._logger.debug(f"Seeded {count} {vehicle_type.value} slots on {floor.id}")

        self._logger.info(f"Seeded {occupied} occupied slots out of {len(self._slots)}")

    # ------------------------------------------------------------------
    # Internal helpers (caller holds the lock)
    # ------------------------------------------------------------------

    def _iter_floors(self) -> Iterator[Floor]:
        for building in self._buildings.values():
            yield from building.floors

    def _iter_slots(self) -> Iterator[ParkingSlot]:
        for floor in self._iter_floors():
            yield from floor.slots

    def _find_floor(self, building_id: str, floor_id: str) -> Optional[Floor]:
        building = self._buildings.get(building_id)
        if building is None:
            return None
        return building.find_floor(floor_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all_buildings(self) -> Dict[str, Building]:
        with self._lock:
            return copy.deepcopy(self._buildings)

    def find_slot_by_id(self, slot_id: str) -> Optional[ParkingSlot]:
        with self._lock:
            slot = self._slots.get(slot_id)
            return copy.deepcopy(slot) if slot is not None else None

    def find_available_slots(self, vehicle_type: VehicleType) -> List[ParkingSlot]:
        with self._lock:
            return [
                copy.deepcopy(slot) for slot in self._iter_slots()
                if slot.vehicle_type == vehicle_type and not slot.occupied
            ]

    def find_first_available_slot(self, vehicle_type: VehicleType) -> Optional[ParkingSlot]:
        with self._lock:
            for slot in self._iter_slots():
                if slot.vehicle_type == vehicle_type and not slot.occupied:
                    return copy.deepcopy(slot)
            return None

    def find_slots_by_building_and_floor(self, building_id: str, floor_id: str) -> List[ParkingSlot]:
        with self._lock:
            floor = self._find_floor(building_id, floor_id)
            if floor is None:
                return []
            return copy.deepcopy(floor.slots)

    def get_floor_availability(self, building_id: str, floor_id: str) -> Optional[FloorAvailability]:
        with self._lock:
            floor = self._find_floor(building_id, floor_id)
            if floor is None:
                return None
            return floor.availability()

    def get_all_slots(self) -> List[ParkingSlot]:
        with self._lock:
            return copy.deepcopy(list(self._iter_slots()))

    def find_all_floors(self) -> List[Floor]:
        with self._lock:
            return copy.deepcopy(list(self._iter_floors()))

    def count_available(self, vehicle_type: Optional[VehicleType] = None) -> int:
        """System-wide count of unoccupied slots, optionally of one type"""
        with self._lock:
            return sum(
                1 for slot in self._slots.values()
                if not slot.occupied and (vehicle_type is None or slot.vehicle_type == vehicle_type)
            )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def update_slot(self, slot: ParkingSlot) -> None:
        with self._lock:
            floor = self._find_floor(slot.building_id, slot.floor_id)
            if floor is None:
                self._logger.debug(
                    f"Ignoring update of {slot.id}: no floor {slot.building_id}/{slot.floor_id}"
                )
                return

            for index, current in enumerate(floor.slots):
                if current.id == slot.id:
                    break
            else:
                self._logger.debug(f"Ignoring update of {slot.id}: not on {floor.id}")
                return

            if current.vehicle_type != slot.vehicle_type:
                self._logger.warning(
                    f"Ignoring update of {slot.id}: vehicle type cannot change "
                    f"from {current.vehicle_type.value} to {slot.vehicle_type.value}"
                )
                return

            stored = copy.deepcopy(slot)
            stored.info.touch()
            floor.slots[index] = stored
            self._slots[stored.id] = stored
            self._logger.debug(f"Updated slot {stored.id} (occupied={stored.occupied})")

    @contextmanager
    def transaction(self):
        """Hold the store lock for the duration of the block"""
        with self._lock:
            yield self
