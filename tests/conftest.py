"""
This module contains pytest fixtures and configuration for testing.
"""
import os
from unittest.mock import patch

# Settings are read on import of the app; give it a project to point at.
os.environ["SUPABASE_URL"] = "https://example.supabase.co"
os.environ["SUPABASE_KEY"] = "test-anon-key"
os.environ.pop("SUPABASE_JWT_SECRET", None)
os.environ.pop("SUPABASE_SERVICE_ROLE_KEY", None)

import pytest
from fastapi.testclient import TestClient

from storerate.main import app

from fakes import FakeBackend


@pytest.fixture
def backend():
    """
    Shared fake Supabase project with one user of each role and two stores.
    """
    backend = FakeBackend()
    backend.admin = backend.add_user("Administrator Of The Platform", "admin@example.com", role="admin")
    backend.owner = backend.add_user("Owner Of The Corner Bakery", "owner@example.com", role="store_owner")
    backend.normal = backend.add_user("Regular Customer Account", "user@example.com", role="user")
    backend.bakery = backend.add_store(
        "Corner Bakery And Coffee House", "bakery@example.com", "1 Main Street, Springfield",
        backend.owner["id"],
    )
    backend.books = backend.add_store(
        "Second Chapter Books And Gifts", "books@example.com", "99 Elm Avenue, Shelbyville",
        None,
    )
    return backend

@pytest.fixture
def client(backend):
    """
    Test client whose requests each get a fresh fake Supabase client,
    exactly like `new_supabase_client()` does in production.
    """
    with patch("storerate.core.auth.new_supabase_client", side_effect=backend.client), \
         patch("storerate.services.user_service.new_supabase_client", side_effect=backend.client):
        yield TestClient(app)
