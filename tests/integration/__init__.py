"""
Integration Tests Package for the Parking Capacity Service

Integration tests focus on:
1. The HTTP API end to end through FastAPI's TestClient
2. Concurrent parking against a shared store
"""

import sys
from pathlib import Path

# Add the src directory to the Python path for imports
src_root = Path(__file__).parent.parent.parent / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))
