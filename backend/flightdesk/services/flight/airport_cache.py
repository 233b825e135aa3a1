"""
Process-lifetime airport cache.

Airport metadata is effectively static, so entries never expire and are
never evicted. Two requests missing the same code at once may both call
the provider; the later write wins and both values are equivalent.
"""
import logging
import threading
from typing import Awaitable, Callable, Dict, List, Optional

from flightdesk.models.flight_models import Airport

logger = logging.getLogger("FlightDesk-AirportCache")

AirportLookup = Callable[[str], Awaitable[Optional[Airport]]]


def normalize_code(code: Optional[str]) -> str:
    return (code or "").strip().upper()


def parse_codes(codes_csv: Optional[str]) -> List[str]:
    """'jfk, JFK , lax' -> ['JFK', 'LAX'] (trimmed, upper-cased, de-duplicated, first-seen order)."""
    seen: Dict[str, None] = {}
    for part in (codes_csv or "").split(","):
        code = normalize_code(part)
        if code:
            seen.setdefault(code, None)
    return list(seen)


class AirportCache:
    def __init__(self, lookup: AirportLookup):
        self._lookup = lookup
        self._store: Dict[str, Airport] = {}
        self._lock = threading.Lock()

    def get(self, code: str) -> Optional[Airport]:
        with self._lock:
            return self._store.get(normalize_code(code))

    def put(self, code: str, airport: Airport) -> None:
        with self._lock:
            self._store[normalize_code(code)] = airport

    async def resolve(self, code: Optional[str]) -> Optional[Airport]:
        """
        Cached airport for `code`, asking the provider on a miss.
        Unknown codes (provider returns None) are not cached.
        """
        key = normalize_code(code)
        if not key:
            return None

        cached = self.get(key)
        if cached is not None:
            return cached

        airport = await self._lookup(key)
        if airport is not None:
            self.put(key, airport)
            logger.info(f"🛬 Airport cached | {key}")
        return airport

    async def resolve_many(self, codes_csv: Optional[str]) -> Dict[str, Airport]:
        """Resolves a comma-separated code list; unknown codes are left out."""
        resolved: Dict[str, Airport] = {}
        for code in parse_codes(codes_csv):
            airport = await self.resolve(code)
            if airport is not None:
                resolved[code] = airport
        return resolved

    def clear(self) -> None:
        """Drops every cached airport."""
        with self._lock:
            self._store.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._store)
