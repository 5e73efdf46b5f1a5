import pytest
import sys
from pathlib import Path

# Add project root to sys.path
ROOT_DIR = Path(__file__).parents[1]
sys.path.insert(0, str(ROOT_DIR))

from app_unified import create_app
from core.plugin_loader import discover_plugins
from core.quota import Quota

discover_plugins()

KB = 1024
MB = 1024 * 1024

@pytest.fixture
def app():
    app = create_app()
    app.config['TESTING'] = True
    return app

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def quota():
    return Quota(file_limit=2 * MB, entry_limit=512 * KB)
