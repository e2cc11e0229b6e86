"""
Unit Tests Package for the Parking Capacity Service

Covers the domain model, factories, the in-memory store, the application
service, DTOs and configuration loading in isolation.
"""

import sys
from pathlib import Path

# Add the src directory to the Python path for imports
src_root = Path(__file__).parent.parent.parent / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))
