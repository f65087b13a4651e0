"""
Optional registry lookup for aircraft make/model/year.

The registry service itself is injected (anything implementing
RegistryClient). This module decides whether a lookup may happen at all,
serves answers from a 24 h cache and bounds every network call by a short
timeout. Lookups are opt-in and limited to US (N-number) registrations.
"""

from __future__ import annotations
import asyncio
import logging
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Mapping, MutableMapping, Optional, Protocol, Sequence

from .domain import AircraftProfile

logger = logging.getLogger(__name__)


US_REGISTRATION_PREFIX = "N"
LOOKUP_TIMEOUT_S = 2.0
CACHE_TTL_S = 24 * 60 * 60


class RegistryClient(Protocol):
    async def fetch(self, tail_number: str) -> Optional[Mapping[str, Any]]:
        """Raw registry record for a normalized tail number, None when unknown."""
        ...

    async def is_reachable(self) -> bool:
        ...


@dataclass(frozen=True)
class LookupSettings:
    enabled: bool = False       # user opt-in
    timeout_s: float = LOOKUP_TIMEOUT_S
    cache_ttl_s: float = CACHE_TTL_S


@dataclass(frozen=True)
class LookupResult:
    make: str
    model: str
    year: str = ""
    source: str = "registry"    # "registry" or "cache"


@dataclass
class CacheEntry:
    data: Dict[str, str]
    timestamp: float


def normalize_tail(tail_number: str) -> str:
    return tail_number.strip().upper()


def is_us_registration(tail_number: str | None) -> bool:
    if not tail_number:
        return False
    cleaned = normalize_tail(tail_number)
    return cleaned.startswith(US_REGISTRATION_PREFIX) and len(cleaned) >= 2


def parse_registry_record(data: Mapping[str, Any]) -> Optional[Dict[str, str]]:
    """Pick make/model/year out of a registry record; None without make and model."""
    year = data.get("MFR_YEAR") or data.get("YEAR_MFR") or data.get("mfr_year") or ""
    make = data.get("MFR_NAME") or data.get("MANUFACTURER") or data.get("mfr_name") or ""
    model = data.get("MODEL") or data.get("model") or ""
    if not (make and model):
        return None
    return {"make": str(make).strip(), "model": str(model).strip(), "year": str(year).strip()}


class RegistryLookup:
    """Cache-first, opt-in, timeout-bounded front end to a RegistryClient."""

    def __init__(
        self,
        client: RegistryClient,
        settings: LookupSettings = LookupSettings(),
        cache: Optional[MutableMapping[str, CacheEntry]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.settings = settings
        self.cache: MutableMapping[str, CacheEntry] = cache if cache is not None else {}
        self.clock = clock

    def _cached(self, key: str) -> Optional[CacheEntry]:
        entry = self.cache.get(key)
        if entry is None:
            return None
        if self.clock() - entry.timestamp > self.settings.cache_ttl_s:
            return None
        return entry

    def clear_expired(self) -> int:
        now = self.clock()
        expired = [k for k, e in self.cache.items() if now - e.timestamp > self.settings.cache_ttl_s]
        for k in expired:
            del self.cache[k]
        return len(expired)

    async def lookup(self, tail_number: str) -> Optional[LookupResult]:
        """
        Make/model/year for a tail number, or None.

        Cancelling the awaiting task cancels the registry call; a timeout or
        a failing client only costs this one lookup.
        """
        if not is_us_registration(tail_number):
            logger.debug("Skipping lookup for %r: not a US registration", tail_number)
            return None

        key = normalize_tail(tail_number)
        entry = self._cached(key)
        if entry is not None:
            return LookupResult(source="cache", **entry.data)

        if not self.settings.enabled:
            return None
        try:
            reachable = await asyncio.wait_for(self.client.is_reachable(), timeout=self.settings.timeout_s)
        except asyncio.TimeoutError:
            reachable = False
        except Exception as e:
            logger.warning("Registry reachability check failed: %s", e)
            reachable = False
        if not reachable:
            logger.info("Registry lookup unavailable; skipping %s", key)
            return None

        try:
            raw = await asyncio.wait_for(self.client.fetch(key), timeout=self.settings.timeout_s)
        except asyncio.TimeoutError:
            logger.warning("Registry lookup for %s timed out after %.1fs", key, self.settings.timeout_s)
            return None
        except Exception as e:
            logger.warning("Registry lookup for %s failed: %s", key, e)
            return None

        if raw is None:
            logger.info("%s not found in registry", key)
            return None

        data = parse_registry_record(raw)
        if data is None:
            logger.warning("Unexpected registry record for %s: %r", key, raw)
            return None

        self.cache[key] = CacheEntry(data=data, timestamp=self.clock())
        return LookupResult(source="registry", **data)


async def enrich_profiles(lookup: RegistryLookup, profiles: Sequence[AircraftProfile]) -> List[AircraftProfile]:
    """
    Overlay registry make/model/year onto imported profiles.

    Registry data wins where it exists; profiles without a registry answer
    keep the logbook's description. Lookups run one after another.
    """
    out: List[AircraftProfile] = []
    for profile in profiles:
        found = None if profile.is_simulator else await lookup.lookup(profile.aircraft_id)
        if found is None:
            out.append(profile)
            continue
        out.append(
            replace(
                profile,
                make=found.make,
                model=found.model,
                year=found.year or profile.year,
                aircraft_type=f"{found.make} {found.model}".strip(),
            )
        )
    return out
