#!/usr/bin/env python3
"""
HTTP API Integration Tests

Drives the FastAPI application end to end with TestClient.
"""

import unittest
from unittest.mock import Mock

from fastapi.testclient import TestClient

from parking_capacity.application.parking_service import ParkingService, SlotAllocationError
from parking_capacity.infrastructure.config import ParkingSettings, SeedingSettings
from parking_capacity.infrastructure.repositories import InMemoryParkingRepository
from parking_capacity.presentation.api import create_app


class ApiTestCase(unittest.TestCase):
    """Base class with an unseeded store behind the app"""

    def setUp(self):
        self.repository = InMemoryParkingRepository(seeding=SeedingSettings(enabled=False))
        self.client = TestClient(create_app(service=ParkingService(self.repository)))


class TestCapacityEndpoint(ApiTestCase):

    def test_capacity(self):
        response = self.client.get("/api/parking/capacity")
        self.assertEqual(response.status_code, 200)

        body = response.json()
        self.assertEqual([b["buildingId"] for b in body], ["B1", "B2", "B3", "B4"])
        self.assertEqual(body[0]["floors"][0], {
            "floorId": "F1",
            "availableSlots": {"TWO_WHEELER": 50, "FOUR_WHEELER": 30}
        })
        self.assertEqual([f["floorId"] for f in body[3]["floors"]], ["F1", "F2"])


class TestSlotEndpoint(ApiTestCase):

    def test_available_slot(self):
        response = self.client.get("/api/parking/slot/B1-F1-TW-01")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            "slotId": "B1-F1-TW-01", "message": "Available", "success": True
        })

    def test_unknown_slot_is_not_an_http_error(self):
        response = self.client.get("/api/parking/slot/B9-F9-XX-99")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            "slotId": None, "message": "Slot not found", "success": False
        })


class TestParkEndpoint(ApiTestCase):

    def test_park_four_wheeler(self):
        response = self.client.post(
            "/api/parking/park",
            json={"registrationNumber": "KA01AB1234", "vehicleType": "FOUR_WHEELER"}
        )
        self.assertEqual(response.status_code, 200)

        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "Vehicle parked successfully")
        self.assertRegex(body["slotId"], r"^B\d-F\d-FW-\d{2}$")

        status = self.client.get(f"/api/parking/slot/{body['slotId']}").json()
        self.assertEqual(status["message"], "Occupied")

    def test_park_updates_capacity(self):
        self.client.post(
            "/api/parking/park",
            json={"registrationNumber": "MH01AA0001", "vehicleType": "TWO_WHEELER"}
        )
        floor = self.client.get("/api/parking/capacity").json()[0]["floors"][0]
        self.assertEqual(floor["availableSlots"], {"TWO_WHEELER": 49, "FOUR_WHEELER": 30})

    def test_no_capacity(self):
        seeding = SeedingSettings(random_seed=1, two_wheeler_range=(50, 50), four_wheeler_range=(0, 0))
        client = TestClient(create_app(settings=ParkingSettings(seeding=seeding)))

        response = client.post(
            "/api/parking/park",
            json={"registrationNumber": "MH01AA0001", "vehicleType": "TWO_WHEELER"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            "slotId": None, "message": "No available slots for TWO_WHEELER", "success": False
        })

    def test_invalid_vehicle_type(self):
        response = self.client.post(
            "/api/parking/park",
            json={"registrationNumber": "KA01AB1234", "vehicleType": "BUS"}
        )
        self.assertEqual(response.status_code, 422)

    def test_malformed_body(self):
        response = self.client.post(
            "/api/parking/park",
            content=b"{not json",
            headers={"Content-Type": "application/json"}
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(self.repository.count_available(), 640)

    def test_service_error_mapped_to_500(self):
        service = Mock()
        service.park_vehicle.side_effect = SlotAllocationError("Slot B1-F1-TW-01 is already occupied")
        client = TestClient(create_app(service=service))

        response = client.post(
            "/api/parking/park",
            json={"registrationNumber": "KA01AB1234", "vehicleType": "TWO_WHEELER"}
        )
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["errorCode"], "SlotAllocationError")


class TestAvailabilityEndpoint(ApiTestCase):

    def test_existing_floor(self):
        response = self.client.post(
            "/api/parking/availability", json={"buildingId": "B2", "floorId": "F2"}
        )
        self.assertEqual(response.status_code, 200)

        body = response.json()
        self.assertEqual(body["buildingId"], "B2")
        self.assertEqual(body["floorId"], "F2")
        self.assertEqual(body["totalAvailableTwoWheelerSlots"], 50)
        self.assertEqual(body["totalAvailableFourWheelerSlots"], 30)
        self.assertEqual(body["availableTwoWheelerSlots"][0], "B2-F2-TW-01")
        self.assertEqual(body["availableFourWheelerSlots"][-1], "B2-F2-FW-30")

    def test_unknown_building(self):
        response = self.client.post(
            "/api/parking/availability", json={"buildingId": "B999", "floorId": "F1"}
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.content, b"")

    def test_unknown_floor(self):
        response = self.client.post(
            "/api/parking/availability", json={"buildingId": "B1", "floorId": "F7"}
        )
        self.assertEqual(response.status_code, 404)


class TestSeededApplication(unittest.TestCase):

    def test_occupancy_is_seeded(self):
        client = TestClient(create_app(settings=ParkingSettings(seeding=SeedingSettings(random_seed=4))))

        for building in client.get("/api/parking/capacity").json():
            for floor in building["floors"]:
                self.assertTrue(20 <= floor["availableSlots"]["TWO_WHEELER"] <= 45)
                self.assertTrue(15 <= floor["availableSlots"]["FOUR_WHEELER"] <= 25)

    def test_health(self):
        client = TestClient(create_app(settings=ParkingSettings(seeding=SeedingSettings(enabled=False))))
        response = client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})


if __name__ == '__main__':
    unittest.main()
