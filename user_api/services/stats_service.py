# user_api/services/stats_service.py
"""
Aggregates over an already-fetched list of users (plain dicts, as returned by
GET /api/users). Nothing is cached: every call re-scans the list.
"""
import math
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

SEARCH_FIELDS = ("username", "email", "first_name", "last_name", "city")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def average_age(users: Iterable[Dict[str, Any]]) -> int:
    """Rounded mean of the ages that are set; 0 when nobody has an age."""
    ages = [u["age"] for u in users if u.get("age")]
    if not ages:
        return 0
    return round_half_up(sum(ages) / len(ages))


def rank_cities(counts: Dict[str, int], limit: int = 3) -> List[str]:
    # most common first, alphabetical among equals
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [city for city, _ in ordered[:limit]]


def top_cities(users: Iterable[Dict[str, Any]], limit: int = 3) -> List[str]:
    counts = Counter(u["city"] for u in users if u.get("city"))
    return rank_cities(counts, limit=limit)


def city_counts(users: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    return dict(Counter(u["city"] for u in users if u.get("city")))


def filter_users(users: List[Dict[str, Any]], term: Optional[str]) -> List[Dict[str, Any]]:
    """Case-insensitive substring match over the searchable text fields."""
    if not term or not term.strip():
        return list(users)
    needle = term.strip().lower()
    out = []
    for u in users:
        for field in SEARCH_FIELDS:
            value = u.get(field)
            if value and needle in str(value).lower():
                out.append(u)
                break
    return out


def compute_stats(users: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "totalUsers": len(users),
        "averageAge": average_age(users),
        "topCities": top_cities(users),
    }
