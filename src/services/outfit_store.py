"""
Wardrobe and saved-outfit store backed by Supabase.

Tables (owned by the backend, read/written here):
- ``clothing_items``: the user's wardrobe, soft-deleted via ``deleted_at``
- ``saved_outfits``: one row per saved outfit, with per-dimension score
  columns and a "Score: NN%" note
- ``outfit_items``: outfit -> clothing item links

Backend failures surface as :class:`OutfitStoreError`; individual bad
wardrobe rows are skipped and logged.
"""

import threading
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from supabase import Client

from core.logging import LoggerMixin, bound_context
from recs.generator import ScoredOutfit
from scoring.context import OutfitHistoryEntry
from scoring.models import ClothingItem
from scoring.serialization import format_score_note, to_db_columns

GENERATED_SOURCE_TYPE = "ai_generated"
GENERATED_OUTFIT_TAG = "ai-generated"

_ITEM_SELECT = (
    "id, user_id, name, category, subcategory, color, brand, size, "
    "seasons, occasions, tags, is_favorite, last_worn, times_worn, price"
)
_HISTORY_SELECT = "id, created_at, last_worn, outfit_items(clothing_item_id)"


class OutfitStoreError(Exception):
    """Raised when the wardrobe / outfit backend cannot be read or written."""
    pass


def default_outfit_name(items: Iterable[ClothingItem]) -> str:
    """Name like "Work Look" from the most common occasion."""
    counts = Counter(o.value for item in items for o in item.occasions)
    if not counts:
        return "Casual Look"
    occasion = min(counts, key=lambda o: (-counts[o], o))
    return f"{occasion.title()} Look"


def _parse_ts(value: Any) -> Optional[datetime]:
    if not value:
        return None
    try:
        ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


class OutfitStore(LoggerMixin):
    """
    Supabase adapter for the generator's inputs and outputs.

    Usage:
        store = OutfitStore(get_supabase_client())
        wardrobe = store.load_wardrobe(user_id)
        history = store.recent_history(user_id)
        ...
        store.save_outfit(user_id, result.candidates[0])
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    # =========================================================================
    # Wardrobe
    # =========================================================================

    def load_wardrobe(self, user_id: str) -> List[ClothingItem]:
        """All non-deleted clothing items of a user."""
        try:
            result = self.supabase.table("clothing_items").select(
                _ITEM_SELECT
            ).eq("user_id", user_id).is_("deleted_at", "null").execute()
        except Exception as e:
            raise OutfitStoreError(f"Failed to load wardrobe for {user_id}: {e}") from e

        items: List[ClothingItem] = []
        with bound_context(user_id=user_id):
            for row in result.data or []:
                try:
                    items.append(ClothingItem.from_row(row))
                except (KeyError, TypeError, ValueError) as e:
                    self.logger.warning("wardrobe_row_skipped", row_id=row.get("id"), error=str(e))
            self.logger.info("wardrobe_loaded", count=len(items))
        return items

    # =========================================================================
    # Saved outfits
    # =========================================================================

    def save_outfit(
        self,
        user_id: str,
        outfit: ScoredOutfit,
        name: Optional[str] = None,
        occasions: Optional[List[str]] = None,
        seasons: Optional[List[str]] = None,
    ) -> str:
        """
        Persist a generated outfit with its full score breakdown.

        Returns:
            The new ``saved_outfits.id``
        """
        items = outfit.candidate.items
        row: Dict[str, Any] = {
            "user_id": user_id,
            "name": name or default_outfit_name(items),
            "occasions": occasions or [],
            "seasons": seasons or [],
            "tags": [GENERATED_OUTFIT_TAG],
            "source_type": GENERATED_SOURCE_TYPE,
            "is_favorite": False,
            "notes": format_score_note(outfit.score, len(items)),
        }
        row.update(to_db_columns(outfit.score))

        try:
            result = self.supabase.table("saved_outfits").insert(row).execute()
            if not result.data:
                raise OutfitStoreError("saved_outfits insert returned no row")
            outfit_id = result.data[0]["id"]

            links = [{"outfit_id": outfit_id, "clothing_item_id": item.id} for item in items]
            self.supabase.table("outfit_items").insert(links).execute()
        except OutfitStoreError:
            raise
        except Exception as e:
            raise OutfitStoreError(f"Failed to save outfit for {user_id}: {e}") from e

        self.logger.info(
            "outfit_saved",
            user_id=user_id,
            outfit_id=outfit_id,
            items=len(items),
            total=round(outfit.score.total, 4),
        )
        return outfit_id

    def recent_history(self, user_id: str, limit: int = 20) -> List[OutfitHistoryEntry]:
        """
        Most recent saved outfits as history entries for the variety
        dimension.  ``occurred_at`` is the later of last worn / created.
        """
        try:
            result = self.supabase.table("saved_outfits").select(
                _HISTORY_SELECT
            ).eq("user_id", user_id).is_("deleted_at", "null").order(
                "created_at", desc=True
            ).limit(limit).execute()
        except Exception as e:
            raise OutfitStoreError(f"Failed to load outfit history for {user_id}: {e}") from e

        history: List[OutfitHistoryEntry] = []
        for row in result.data or []:
            ids = [
                link.get("clothing_item_id")
                for link in row.get("outfit_items") or []
                if link.get("clothing_item_id")
            ]
            if not ids:
                continue
            stamps = [ts for ts in (_parse_ts(row.get("last_worn")), _parse_ts(row.get("created_at"))) if ts]
            history.append(OutfitHistoryEntry.of(ids, max(stamps) if stamps else None))
        return history


# =============================================================================
# Singleton
# =============================================================================

_store: Optional[OutfitStore] = None
_store_lock = threading.Lock()


def get_outfit_store() -> OutfitStore:
    """Get or create the OutfitStore singleton (thread-safe)."""
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                from config.database import get_supabase_client
                _store = OutfitStore(get_supabase_client())
    return _store
