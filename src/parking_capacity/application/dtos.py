# File: src/parking_capacity/application/dtos.py
"""
Data Transfer Objects (DTOs) for the Parking Capacity Service

1. Input DTOs - request bodies received over HTTP
2. Output DTOs - capacity, slot status and availability responses
3. Error DTOs - payloads for unexpected service failures

Field names are snake_case in Python and camelCase on the wire
(``registration_number`` <-> ``registrationNumber``).
"""

from typing import Dict, List, Optional, Any
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..domain.models import VehicleType, FloorAvailability


# ============================================================================
# BASE DTO CLASS
# ============================================================================

class BaseDTO(BaseModel):
    """Base DTO with common functionality"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True
    )

    def to_dict(self, by_alias: bool = True, **kwargs) -> Dict[str, Any]:
        """Convert DTO to a JSON-ready dictionary"""
        return self.model_dump(mode="json", by_alias=by_alias, **kwargs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseDTO':
        """Create DTO from dictionary"""
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, json_str: str) -> 'BaseDTO':
        """Create DTO from JSON string"""
        return cls.model_validate_json(json_str)


def _require_text(value: str, name: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{name} cannot be blank")
    return value


# ============================================================================
# INPUT DTOs
# ============================================================================

class ParkingRequestDTO(BaseDTO):
    """DTO for parking request"""
    registration_number: str = Field(description="Vehicle registration / license plate number")
    vehicle_type: VehicleType = Field(description="Vehicle type")

    @field_validator("registration_number")
    @classmethod
    def validate_registration_number(cls, v: str) -> str:
        return _require_text(v, "Registration number")


class FloorAvailabilityRequestDTO(BaseDTO):
    """DTO for requesting the availability of one building floor"""
    building_id: str = Field(description="Building identifier, e.g. B1")
    floor_id: str = Field(description="Floor identifier, e.g. F1")

    @field_validator("building_id", "floor_id")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        return _require_text(v, "Identifier")


# ============================================================================
# OUTPUT DTOs
# ============================================================================

class ParkingResponseDTO(BaseDTO):
    """DTO for slot status and parking results"""
    slot_id: Optional[str] = Field(default=None, description="Allocated or referenced slot id")
    message: str = Field(description="Result message")
    success: bool = Field(description="Operation success indicator")


class FloorCapacityDTO(BaseDTO):
    floor_id: str
    available_slots: Dict[VehicleType, int] = Field(
        description="Available slot count for every vehicle type"
    )


class BuildingCapacityDTO(BaseDTO):
    """Floor-by-floor availability of one building"""
    building_id: str
    floors: List[FloorCapacityDTO] = Field(default_factory=list)


class FloorAvailabilityDTO(BaseDTO):
    """DTO for floor-wise parking availability"""
    building_id: str
    floor_id: str
    available_two_wheeler_slots: List[str] = Field(default_factory=list)
    available_four_wheeler_slots: List[str] = Field(default_factory=list)
    total_available_two_wheeler_slots: int = Field(default=0, ge=0)
    total_available_four_wheeler_slots: int = Field(default=0, ge=0)

    @classmethod
    def from_domain(cls, availability: FloorAvailability) -> 'FloorAvailabilityDTO':
        return cls(
            building_id=availability.building_id,
            floor_id=availability.floor_id,
            available_two_wheeler_slots=list(availability.available_two_wheeler_slots),
            available_four_wheeler_slots=list(availability.available_four_wheeler_slots),
            total_available_two_wheeler_slots=availability.total_available_two_wheeler_slots,
            total_available_four_wheeler_slots=availability.total_available_four_wheeler_slots
        )


# ============================================================================
# ERROR DTOs
# ============================================================================

class ErrorResponseDTO(BaseDTO):
    """Standard error response DTO"""
    success: bool = Field(default=False, description="Success flag")
    error: str = Field(description="Error message")
    error_code: Optional[str] = Field(default=None, description="Error code")
    timestamp: datetime = Field(default_factory=datetime.now, description="Error timestamp")
