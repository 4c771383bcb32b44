"""Configure pytest for the prediction alerts project."""
import os
import sys
from pathlib import Path

# =============================================================================
# Test Environment Configuration
# =============================================================================
# Set environment for tests BEFORE any imports
os.environ.setdefault("ENV", "test")

# Repo root holds the alerts, context and app packages
root_path = Path(__file__).parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))


def pytest_configure(config):
    """Ensure environment is set before test collection."""
    os.environ.setdefault("ENV", "test")
