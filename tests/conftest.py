"""
Pytest configuration and shared fixtures for the outfit engine tests.
"""
import os
import sys
from unittest.mock import MagicMock, patch

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

# Load environment variables
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))

from scoring.models import ClothingItem


# ============================================================================
# Fixtures: Test Data Factories
# ============================================================================

def make_item(item_id: str, category: str, color: str, **kwargs) -> ClothingItem:
    """Build a ClothingItem from loose values (strings for enums)."""
    return ClothingItem.create(id=item_id, category=category, color=color, **kwargs)


@pytest.fixture
def item_factory():
    """Factory fixture: ``item_factory("t1", "tops", "navy", tags=["cotton"])``."""
    return make_item


@pytest.fixture
def basic_outfit() -> list:
    """Navy top, black jeans, white sneakers."""
    return [
        make_item("top-navy", "tops", "navy", seasons=["spring", "fall"], occasions=["casual"]),
        make_item("jeans-black", "bottoms", "black", seasons=["spring", "fall"], occasions=["casual"],
                  tags=["denim"]),
        make_item("sneakers-white", "shoes", "white", seasons=["spring", "summer", "fall"],
                  occasions=["casual"], tags=["sneakers"]),
    ]


@pytest.fixture
def sample_wardrobe() -> list:
    """Small but complete wardrobe: 3 tops, 2 bottoms, 1 dress, 2 shoes, 1 jacket, 1 bag."""
    return [
        make_item("t1", "tops", "white", occasions=["casual", "work"], seasons=["spring", "summer"]),
        make_item("t2", "tops", "#1f3a93", occasions=["work"], seasons=["fall", "winter"],
                  tags=["long sleeve", "classic"]),
        make_item("t3", "tops", "coral", occasions=["casual", "party"], seasons=["summer"],
                  tags=["bright", "tank"]),
        make_item("b1", "bottoms", "black", occasions=["work", "casual"],
                  seasons=["spring", "summer", "fall", "winter"], subcategory="trousers"),
        make_item("b2", "bottoms", "denim", occasions=["casual"], seasons=["spring", "fall"],
                  tags=["jeans"]),
        make_item("d1", "dresses", "burgundy", occasions=["party", "date"], seasons=["fall", "winter"]),
        make_item("s1", "shoes", "white", occasions=["casual"], tags=["sneakers"]),
        make_item("s2", "shoes", "cognac", occasions=["work"], tags=["loafers"]),
        make_item("o1", "outerwear", "camel", occasions=["work", "casual"], seasons=["fall", "winter"],
                  tags=["waterproof"]),
        make_item("a1", "accessories", "gold", occasions=["party"]),
    ]


@pytest.fixture
def clothing_item_row() -> dict:
    """Sample ``clothing_items`` row as returned by Supabase."""
    return {
        "id": "item-001",
        "user_id": "test-user-001",
        "name": "Oxford Shirt",
        "category": "tops",
        "subcategory": "Button-down",
        "color": "#ffffff",
        "brand": "TestBrand",
        "size": "M",
        "seasons": ["spring", "fall", "monsoon"],
        "occasions": ["work", "casual"],
        "tags": ["cotton", "classic"],
        "is_favorite": True,
        "last_worn": "2025-01-10T08:30:00Z",
        "times_worn": 4,
        "price": "49.90",
    }


# ============================================================================
# Fixtures: Mock Services
# ============================================================================

@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_client.table.return_value.select.return_value.execute.return_value.data = []
    mock_client.table.return_value.insert.return_value.execute.return_value.data = [{"id": "test"}]

    return mock_client


@pytest.fixture
def mock_supabase(mock_supabase_client):
    """
    ``config.database`` wired to the mock client with test credentials.

    Yields the ``create_client`` mock; the client cache is cleared on
    both sides so no real client leaks in or out.
    """
    from config import database
    from config.settings import get_settings_for_testing

    settings = get_settings_for_testing(
        supabase_url="https://test.supabase.co",
        supabase_service_key="test-key",
    )
    database.get_supabase_client.cache_clear()
    with patch.object(database, "get_settings", return_value=settings), \
            patch.object(database, "create_client", return_value=mock_supabase_client) as create:
        yield create
    database.get_supabase_client.cache_clear()


# ============================================================================
# Collection
# ============================================================================

def pytest_collection_modifyitems(config, items):
    """Auto-skip Supabase tests if no credentials are configured."""
    skip_supabase = pytest.mark.skip(reason="Supabase tests require credentials")
    supabase_url = os.getenv("SUPABASE_URL")

    for item in items:
        if "supabase" in item.keywords and not supabase_url:
            item.add_marker(skip_supabase)
