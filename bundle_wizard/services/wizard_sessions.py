"""
Open Wizard Cache
=================

Keeps open BundleWizard instances in memory between HTTP requests. Wizard
state is owned by one customer for its open/close lifetime and is never
persisted, so losing an entry (TTL expiry, eviction, restart) is the same as
the customer closing the wizard.

Cache Eviction Strategy:
------------------------
1. **TTL-based**: Wizards not touched within WIZARD_TTL_SECONDS are dropped.
   Checked probabilistically (~1% of lookups) to avoid overhead.

2. **LRU-based**: When the cache reaches WIZARD_MAX_CACHE_SIZE, the oldest
   10% of wizards (by last access time) are dropped to make room.

Thread Safety:
--------------
All cache operations are protected by a threading.Lock. FastAPI runs sync
endpoints in a thread pool, so concurrent requests may touch the cache.

Each entry also carries its own lock. Callers that drive a wizard use
locked_wizard() so that a transition and the state read after it happen as
one step; two requests for the same wizard (a double-clicked confirm, say)
run one after the other. The cache lock is never held while waiting for an
entry lock.

Usage:
------
    from bundle_wizard.services.wizard_sessions import locked_wizard, store_wizard

    wizard_id = store_wizard(wizard)
    with locked_wizard(wizard_id) as wizard:
        if wizard is None:
            raise HTTPException(404, "Wizard not found")
        wizard.next()
"""

import logging
import random
import threading
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from .. import config
from ..wizard import BundleWizard


logger = logging.getLogger(__name__)


# =============================================================================
# Wizard Cache
# =============================================================================
# {wizard_id: {"wizard": BundleWizard, "lock": threading.Lock, "last_access": timestamp}}

WIZARD_CACHE: Dict[str, Dict[str, Any]] = {}
_cache_lock = threading.Lock()


def _cleanup_expired_wizards() -> int:
    """Drop wizards that have not been touched within WIZARD_TTL_SECONDS."""
    now = time.time()

    with _cache_lock:
        expired = [
            wid for wid, entry in WIZARD_CACHE.items()
            if now - entry.get("last_access", 0) > config.WIZARD_TTL_SECONDS
        ]
        for wid in expired:
            del WIZARD_CACHE[wid]

    if expired:
        logger.debug("Cleaned up %d expired wizards from cache", len(expired))

    return len(expired)


def _evict_oldest_locked(count: int) -> None:
    """Evict the least recently used wizards. Caller must hold _cache_lock."""
    oldest = sorted(WIZARD_CACHE.items(), key=lambda x: x[1].get("last_access", 0))
    for wid, _ in oldest[:max(count, 1)]:
        del WIZARD_CACHE[wid]
    logger.debug("Evicted %d oldest wizards from cache", min(max(count, 1), len(oldest)))


# =============================================================================
# Public Functions
# =============================================================================

def store_wizard(wizard: BundleWizard) -> str:
    """Cache a newly opened wizard and return its id."""
    wizard_id = str(uuid.uuid4())
    with _cache_lock:
        if len(WIZARD_CACHE) >= config.WIZARD_MAX_CACHE_SIZE:
            _evict_oldest_locked(config.WIZARD_MAX_CACHE_SIZE // 10)
        WIZARD_CACHE[wizard_id] = {
            "wizard": wizard,
            "lock": threading.Lock(),
            "last_access": time.time(),
        }
    return wizard_id


def _get_entry(wizard_id: str) -> Optional[Dict[str, Any]]:
    if random.randint(1, 100) == 1:
        _cleanup_expired_wizards()

    with _cache_lock:
        entry = WIZARD_CACHE.get(wizard_id)
        if entry is None:
            return None
        if time.time() - entry["last_access"] > config.WIZARD_TTL_SECONDS:
            del WIZARD_CACHE[wizard_id]
            return None
        entry["last_access"] = time.time()
        return entry


def get_wizard(wizard_id: str) -> Optional[BundleWizard]:
    """Return the open wizard for this id, refreshing its TTL, or None."""
    entry = _get_entry(wizard_id)
    return entry["wizard"] if entry is not None else None


@contextmanager
def locked_wizard(wizard_id: str) -> Iterator[Optional[BundleWizard]]:
    """
    Yield the open wizard for this id while holding its entry lock, or None.

    A wizard discarded while this call waited for the lock yields None, so a
    request queued behind a confirm or cancel sees the wizard as gone.
    """
    entry = _get_entry(wizard_id)
    if entry is None:
        yield None
        return

    with entry["lock"]:
        with _cache_lock:
            still_cached = WIZARD_CACHE.get(wizard_id) is entry
        yield entry["wizard"] if still_cached else None


def discard_wizard(wizard_id: str) -> bool:
    """Remove a wizard from the cache. Returns False if it was not there."""
    with _cache_lock:
        return WIZARD_CACHE.pop(wizard_id, None) is not None


def clear_cache() -> int:
    """Drop every cached wizard. Returns how many there were."""
    with _cache_lock:
        count = len(WIZARD_CACHE)
        WIZARD_CACHE.clear()
    logger.info("Cleared %d wizards from cache", count)
    return count


def get_cache_stats() -> Dict[str, Any]:
    with _cache_lock:
        access_times = [entry["last_access"] for entry in WIZARD_CACHE.values()]
        return {
            "size": len(WIZARD_CACHE),
            "max_size": config.WIZARD_MAX_CACHE_SIZE,
            "ttl_seconds": config.WIZARD_TTL_SECONDS,
            "oldest_access": min(access_times) if access_times else None,
            "newest_access": max(access_times) if access_times else None,
        }
