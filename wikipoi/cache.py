# cache.py
# In-process POI detail cache: write-once per page id, unbounded, with
# dogpile protection via per-key locks and hit/miss counters.

import asyncio
from dataclasses import asdict, dataclass
from typing import Awaitable, Callable, Dict, Iterator, Optional, Tuple

from wikipoi.models import POIRecord


@dataclass
class Stats:
    cache_hits: int = 0
    cache_misses: int = 0
    detail_fetches: int = 0
    detail_failures: int = 0
    searches: int = 0
    search_failures: int = 0
    published: int = 0

    def as_dict(self) -> Dict:
        out = asdict(self)
        total = self.cache_hits + self.cache_misses
        out["hit_ratio"] = (self.cache_hits / total) if total else None
        return out


class DetailCache:
    """
    Maps page id -> POIRecord for the life of the process. Entries are never
    replaced, evicted or persisted.
    """

    def __init__(self, stats: Optional[Stats] = None):
        self._records: Dict[int, POIRecord] = {}
        self._locks: Dict[int, asyncio.Lock] = {}
        self.stats = stats if stats is not None else Stats()

    def __contains__(self, pageid: int) -> bool:
        return pageid in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[POIRecord]:
        return iter(list(self._records.values()))

    def get(self, pageid: int) -> Optional[POIRecord]:
        return self._records.get(pageid)

    async def get_or_load(
        self,
        pageid: int,
        load: Callable[[], Awaitable[Optional[POIRecord]]],
    ) -> Tuple[Optional[POIRecord], bool]:
        """
        Return (record, hit). On a miss `load` runs under the page's lock, so
        concurrent callers for one new id share a single fetch. A None result
        or an exception from `load` leaves the cache untouched.
        """
        # fast path
        rec = self._records.get(pageid)
        if rec is not None:
            self.stats.cache_hits += 1
            return rec, True

        self.stats.cache_misses += 1
        lock = self._locks.setdefault(pageid, asyncio.Lock())
        try:
            async with lock:
                # double-check
                rec = self._records.get(pageid)
                if rec is not None:
                    self.stats.cache_misses -= 1
                    self.stats.cache_hits += 1
                    return rec, True

                rec = await load()
                if rec is None:
                    return None, False
                self._records[pageid] = rec
                return rec, False
        finally:
            # callers already queued on this lock keep their reference
            if self._locks.get(pageid) is lock:
                del self._locks[pageid]
