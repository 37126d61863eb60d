"""
Critical tests for the Novita starter template.
Run with: pytest starter-template/tests/test_starter.py -v
"""

import os
import sys
import pytest

# Add parent directory to path so we can import app
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def app():
    """Create application for testing."""
    from app import app
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


def test_app_starts(app):
    """App should start without errors."""
    assert app is not None
    assert 'novita' in app.extensions


def test_health_endpoint(client):
    """Health endpoint should return 200."""
    response = client.get('/health')
    assert response.status_code == 200


def test_index_lists_entry_points(client):
    """Index should point at the catalog API."""
    response = client.get('/')
    assert response.status_code == 200
    assert response.get_json()['catalog'] == '/api/catalog'
