"""
Parking Capacity Service

In-memory tracking of parking slot occupancy across buildings and floors,
served over a small JSON REST API.
"""

__version__ = "1.0.0"
