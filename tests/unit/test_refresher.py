"""Tests for the analytics cache refresher."""

import threading
import time
from datetime import datetime, timedelta, timezone

import pytest

from app.errors import ComputeFailureError, InvalidSubjectError, NotFoundError
from app.models.analytics import MAX_SUBJECT_ID, AnalyticsSnapshot, AnalyticsSubject, SubjectKind
from app.services.analytics import AnalyticsCacheRefresher, TtlFreshnessPolicy

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
PAYER_42 = AnalyticsSubject(SubjectKind.PAYER, 42)


class FakeStore:
    def __init__(self):
        self.rows: list[AnalyticsSnapshot] = []
        self.lookups = 0
        self.fail_writes = False

    def latest(self, subject):
        self.lookups += 1
        matching = [s for s in self.rows if s.subject == subject]
        return matching[-1] if matching else None

    def save(self, snapshot):
        if self.fail_writes:
            raise OSError("disk full")
        self.rows.append(snapshot)


class FakeComputer:
    def __init__(self):
        self.calls = 0
        self.error: Exception | None = None
        self.gate: threading.Event | None = None

    def compute(self, subject):
        self.calls += 1
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return {"total_claims": self.calls}


class Clock:
    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def computer():
    return FakeComputer()


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def refresher(store, computer, clock):
    freshness = TtlFreshnessPolicy(
        {SubjectKind.PAYER: timedelta(minutes=5), SubjectKind.PROVIDER: timedelta(hours=24)}
    )
    return AnalyticsCacheRefresher(store=store, computer=computer, freshness=freshness, clock=clock)


def cached(subject: AnalyticsSubject, at: datetime) -> AnalyticsSnapshot:
    return AnalyticsSnapshot(subject.kind, subject.id, at, {"total_claims": 0})


class TestValidation:
    @pytest.mark.parametrize("bad_id", [0, -1, 2**31, 10**45, True, "42", 1.5, None])
    def test_rejects_out_of_range_and_non_int_ids(self, refresher, store, computer, bad_id):
        with pytest.raises(InvalidSubjectError):
            refresher.get_or_refresh(AnalyticsSubject(SubjectKind.PAYER, bad_id))
        assert store.lookups == 0
        assert computer.calls == 0

    def test_accepts_largest_id(self, refresher, computer):
        refresher.get_or_refresh(AnalyticsSubject(SubjectKind.PAYER, MAX_SUBJECT_ID))
        assert computer.calls == 1

    def test_rejects_unknown_kind(self, refresher, store):
        with pytest.raises(InvalidSubjectError):
            refresher.get_or_refresh(AnalyticsSubject("member", 1))
        assert store.lookups == 0

    def test_force_path_validates_too(self, refresher, computer):
        with pytest.raises(InvalidSubjectError):
            refresher.get_or_refresh(AnalyticsSubject(SubjectKind.PROVIDER, 0), force=True)
        assert computer.calls == 0


class TestCachedRead:
    def test_fresh_snapshot_returned_without_recompute(self, refresher, store, computer, clock):
        snapshot = cached(PAYER_42, T0)
        store.rows.append(snapshot)
        clock.advance(minutes=1)

        result = refresher.get_or_refresh(PAYER_42)

        assert result is snapshot
        assert result.computed_at == T0
        assert computer.calls == 0

    def test_miss_computes_once(self, refresher, store, computer):
        result = refresher.get_or_refresh(PAYER_42)

        assert computer.calls == 1
        assert result.body == {"total_claims": 1}
        assert result.computed_at == T0
        assert store.rows == [result]

    def test_stale_snapshot_recomputed(self, refresher, store, computer, clock):
        store.rows.append(cached(PAYER_42, T0))
        clock.advance(minutes=5)

        result = refresher.get_or_refresh(PAYER_42)

        assert computer.calls == 1
        assert result.computed_at == T0 + timedelta(minutes=5)

    def test_ttl_depends_on_kind(self, refresher, store, computer, clock):
        provider = AnalyticsSubject(SubjectKind.PROVIDER, 42)
        store.rows.append(cached(provider, T0))
        clock.advance(hours=2)

        refresher.get_or_refresh(provider)

        assert computer.calls == 0

    def test_subjects_do_not_share_snapshots(self, refresher, store, computer):
        store.rows.append(cached(AnalyticsSubject(SubjectKind.PROVIDER, 42), T0))

        refresher.get_or_refresh(PAYER_42)

        assert computer.calls == 1


class TestForce:
    def test_force_recomputes_fresh_snapshot(self, refresher, store, computer, clock):
        store.rows.append(cached(PAYER_42, T0))
        clock.advance(seconds=1)

        result = refresher.get_or_refresh(PAYER_42, force=True)

        assert computer.calls == 1
        assert result.computed_at > T0
        assert store.lookups == 0

    def test_forced_snapshot_becomes_current(self, refresher, store, clock):
        store.rows.append(cached(PAYER_42, T0))
        clock.advance(seconds=1)
        forced = refresher.get_or_refresh(PAYER_42, force=True)

        assert refresher.get_or_refresh(PAYER_42) is forced
        assert len(store.rows) == 2

    def test_refresh_is_unconditional(self, refresher, computer):
        refresher.refresh(PAYER_42)
        refresher.refresh(PAYER_42)
        assert computer.calls == 2


class TestFailures:
    def test_compute_failure_keeps_previous_snapshot(self, refresher, store, computer, clock):
        previous = cached(PAYER_42, T0)
        store.rows.append(previous)
        computer.error = RuntimeError("aggregation query failed")
        clock.advance(seconds=1)

        with pytest.raises(ComputeFailureError) as exc:
            refresher.get_or_refresh(PAYER_42, force=True)

        assert exc.value.message == "aggregation query failed"
        assert exc.value.kind == "payer"
        assert exc.value.subject_id == 42
        assert store.rows == [previous]
        assert refresher.get_or_refresh(PAYER_42) is previous

    def test_store_failure_is_compute_failure(self, refresher, store):
        store.fail_writes = True

        with pytest.raises(ComputeFailureError, match="disk full"):
            refresher.get_or_refresh(PAYER_42)
        assert store.rows == []

    def test_not_found_propagates_unwrapped(self, refresher, store, computer):
        computer.error = NotFoundError("Payer not found")

        with pytest.raises(NotFoundError):
            refresher.get_or_refresh(PAYER_42)
        assert store.rows == []

    def test_retry_after_failure_recomputes(self, refresher, computer):
        computer.error = RuntimeError("boom")
        with pytest.raises(ComputeFailureError):
            refresher.get_or_refresh(PAYER_42)

        computer.error = None
        result = refresher.get_or_refresh(PAYER_42)
        assert computer.calls == 2
        assert result.body == {"total_claims": 2}


class TestConcurrency:
    def _run_concurrently(self, fn, n: int) -> tuple[list, list, list]:
        results, errors = [], []

        def worker():
            try:
                results.append(fn())
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(n)]
        for t in threads:
            t.start()
        return threads, results, errors

    def test_concurrent_misses_compute_once(self, refresher, store, computer):
        computer.gate = threading.Event()
        threads, results, errors = self._run_concurrently(lambda: refresher.get_or_refresh(PAYER_42), 8)

        time.sleep(0.2)
        computer.gate.set()
        for t in threads:
            t.join(timeout=5)

        assert errors == []
        assert computer.calls == 1
        assert len(store.rows) == 1
        assert all(r is results[0] for r in results)

    def test_concurrent_failure_reaches_every_caller(self, refresher, store, computer):
        computer.gate = threading.Event()
        computer.error = RuntimeError("timeout talking to warehouse")
        threads, results, errors = self._run_concurrently(lambda: refresher.get_or_refresh(PAYER_42, force=True), 4)

        time.sleep(0.2)
        computer.gate.set()
        for t in threads:
            t.join(timeout=5)

        assert results == []
        assert len(errors) == 4
        assert all(isinstance(e, ComputeFailureError) for e in errors)
        assert computer.calls == 1
        assert store.rows == []

    def test_is_refreshing_while_recompute_runs(self, refresher, computer):
        computer.gate = threading.Event()
        threads, results, errors = self._run_concurrently(lambda: refresher.refresh(PAYER_42), 1)

        time.sleep(0.2)
        assert refresher.is_refreshing(PAYER_42) is True
        assert refresher.is_refreshing(AnalyticsSubject(SubjectKind.PROVIDER, 42)) is False

        computer.gate.set()
        for t in threads:
            t.join(timeout=5)

        assert errors == []
        assert refresher.is_refreshing(PAYER_42) is False
