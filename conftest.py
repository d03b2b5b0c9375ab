"""
Root conftest.py for the ABC Retailers admin project.

Puts the service directory on sys.path so its ``app`` package imports the
same way with or without an editable install.
"""

import sys
from pathlib import Path

SERVICE_DIR = Path(__file__).parent / "services" / "retail-admin-service"


def pytest_configure(config):
    """Add the retail admin service directory to sys.path."""
    if str(SERVICE_DIR) not in sys.path:
        sys.path.insert(0, str(SERVICE_DIR))
