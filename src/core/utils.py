"""
Core Utility Functions.

Small helpers shared by the scoring, generation and store modules.
"""

from typing import Any, Iterable, Optional, Set

import numpy as np


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


def normalize_string_set(items: Optional[Iterable[Any]]) -> Set[str]:
    """
    Normalize an iterable of strings to a set of lowercase, stripped strings.

    Accepts a bare string (treated as one element) and skips None/empty
    entries and non-string values.

    Args:
        items: Iterable of strings (may contain None, empty strings)

    Returns:
        Set of normalized strings
    """
    if items is None:
        return set()
    if isinstance(items, str):
        items = [items]
    out = set()
    for s in items:
        if isinstance(s, str):
            s = s.lower().strip()
            if s:
                out.add(s)
    return out


def jaccard(a: Iterable[Any], b: Iterable[Any]) -> float:
    """Jaccard similarity of two collections; 0.0 when both are empty."""
    sa, sb = set(a), set(b)
    union = sa | sb
    if not union:
        return 0.0
    return len(sa & sb) / len(union)


def safe_get(obj: Any, *keys: Any, default: Any = None) -> Any:
    """
    Safely get nested dictionary values.

    Example:
        >>> safe_get({'main': {'temp': 21.5}}, 'main', 'temp')
        21.5
        >>> safe_get({'main': {}}, 'main', 'temp', default=0)
        0
    """
    current = obj
    for key in keys:
        if isinstance(current, dict):
            current = current.get(key)
        elif isinstance(current, (list, tuple)) and isinstance(key, int):
            current = current[key] if -len(current) <= key < len(current) else None
        elif hasattr(current, key):
            current = getattr(current, key)
        else:
            return default
        if current is None:
            return default
    return current


def convert_numpy(obj: Any) -> Any:
    """
    Convert numpy types to Python native types for JSON serialization.

    Examples:
        >>> convert_numpy(np.float64(0.5))
        0.5
        >>> convert_numpy({'total': np.float32(1.5)})
        {'total': 1.5}
    """
    if isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {convert_numpy(k): convert_numpy(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [convert_numpy(v) for v in obj]
    elif isinstance(obj, tuple):
        return tuple(convert_numpy(v) for v in obj)
    elif isinstance(obj, (set, frozenset)):
        return [convert_numpy(v) for v in obj]
    return obj
