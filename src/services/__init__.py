"""
Services module for backend adapters.

Provides the Supabase-backed wardrobe and saved-outfit store.
"""

from services.outfit_store import OutfitStore, OutfitStoreError, get_outfit_store

__all__ = [
    "OutfitStore",
    "OutfitStoreError",
    "get_outfit_store",
]
