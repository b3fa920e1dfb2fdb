"""
Tests for the open wizard cache.
"""
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

import bundle_wizard.config as config_mod
from bundle_wizard.services import wizard_sessions
from bundle_wizard.services.wizard_sessions import (
    WIZARD_CACHE,
    clear_cache,
    discard_wizard,
    get_cache_stats,
    get_wizard,
    locked_wizard,
    store_wizard,
)
from bundle_wizard.wizard import BundleWizard


@pytest.fixture(autouse=True)
def empty_cache():
    WIZARD_CACHE.clear()
    yield
    WIZARD_CACHE.clear()


@pytest.fixture
def make_wizard(wings_meal, flavors, wings_meal_components):
    def _make():
        w = BundleWizard(wings_meal, flavors)
        w.load(wings_meal_components)
        return w
    return _make


class TestWizardCache:
    def test_store_and_get(self, make_wizard):
        wizard = make_wizard()
        wizard_id = store_wizard(wizard)
        assert get_wizard(wizard_id) is wizard

    def test_unknown_id_returns_none(self):
        assert get_wizard("missing") is None

    def test_discard(self, make_wizard):
        wizard_id = store_wizard(make_wizard())
        assert discard_wizard(wizard_id) is True
        assert discard_wizard(wizard_id) is False
        assert get_wizard(wizard_id) is None

    def test_expired_wizard_is_dropped(self, make_wizard):
        wizard_id = store_wizard(make_wizard())
        WIZARD_CACHE[wizard_id]["last_access"] = time.time() - config_mod.WIZARD_TTL_SECONDS - 5
        assert get_wizard(wizard_id) is None
        assert wizard_id not in WIZARD_CACHE

    def test_get_refreshes_last_access(self, make_wizard):
        wizard_id = store_wizard(make_wizard())
        WIZARD_CACHE[wizard_id]["last_access"] = time.time() - 60
        get_wizard(wizard_id)
        assert time.time() - WIZARD_CACHE[wizard_id]["last_access"] < 5

    def test_full_cache_evicts_least_recently_used(self, make_wizard, monkeypatch):
        monkeypatch.setattr(config_mod, "WIZARD_MAX_CACHE_SIZE", 3)
        ids = [store_wizard(make_wizard()) for _ in range(3)]
        WIZARD_CACHE[ids[0]]["last_access"] = time.time() - 100

        new_id = store_wizard(make_wizard())

        assert ids[0] not in WIZARD_CACHE
        assert new_id in WIZARD_CACHE
        assert len(WIZARD_CACHE) == 3

    def test_cleanup_expired(self, make_wizard):
        old_id = store_wizard(make_wizard())
        fresh_id = store_wizard(make_wizard())
        WIZARD_CACHE[old_id]["last_access"] = time.time() - config_mod.WIZARD_TTL_SECONDS - 5

        assert wizard_sessions._cleanup_expired_wizards() == 1
        assert list(WIZARD_CACHE) == [fresh_id]

    def test_stats_and_clear(self, make_wizard):
        store_wizard(make_wizard())
        store_wizard(make_wizard())
        stats = get_cache_stats()
        assert stats["size"] == 2
        assert stats["max_size"] == config_mod.WIZARD_MAX_CACHE_SIZE
        assert stats["oldest_access"] <= stats["newest_access"]

        assert clear_cache() == 2
        assert get_cache_stats()["size"] == 0
        assert get_cache_stats()["oldest_access"] is None


class TestLockedWizard:
    def test_yields_wizard_while_holding_entry_lock(self, make_wizard):
        wizard = make_wizard()
        wizard_id = store_wizard(wizard)
        with locked_wizard(wizard_id) as locked:
            assert locked is wizard
            assert WIZARD_CACHE[wizard_id]["lock"].locked()
        assert not WIZARD_CACHE[wizard_id]["lock"].locked()

    def test_unknown_id_yields_none(self):
        with locked_wizard("missing") as locked:
            assert locked is None

    def test_wizard_discarded_while_waiting_yields_none(self, make_wizard):
        wizard_id = store_wizard(make_wizard())
        entry_lock = WIZARD_CACHE[wizard_id]["lock"]
        seen = []

        def use_wizard():
            with locked_wizard(wizard_id) as locked:
                seen.append(locked)

        entry_lock.acquire()
        worker = threading.Thread(target=use_wizard)
        worker.start()
        discard_wizard(wizard_id)
        entry_lock.release()
        worker.join(timeout=5)

        assert seen == [None]

    def test_concurrent_adjustments_never_over_allocate(self, make_wizard):
        wizard_id = store_wizard(make_wizard())

        def add_buffalo(_):
            with locked_wizard(wizard_id) as wizard:
                return wizard.adjust_slot("buffalo", 1)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(add_buffalo, range(8)))

        # 6 pcs in 3-pc slots takes exactly two additions
        assert results.count(True) == 2
        with locked_wizard(wizard_id) as wizard:
            assert wizard.allocated_units() == 6

    def test_exception_releases_entry_lock(self, make_wizard):
        wizard_id = store_wizard(make_wizard())
        with pytest.raises(RuntimeError):
            with locked_wizard(wizard_id):
                raise RuntimeError("boom")
        assert not WIZARD_CACHE[wizard_id]["lock"].locked()
