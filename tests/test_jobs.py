"""
Tests for the job status tracker.
"""

import anyio
import pytest

from aggregator import JobSpec, JobStatusTracker, SyncStatus
from client import ApiError

SYNC_JOB = JobSpec(
    name="sync",
    pending_message="Enqueued sync...",
    failure_message="Sync failed",
    describe=lambda payload: f"Synced {payload['count']}",
)


@pytest.mark.anyio
async def test_running_then_settled_with_success_message():
    tracker = JobStatusTracker()
    seen = []
    tracker.add_listener(lambda key, status: seen.append((key, status)))

    async def call():
        assert tracker.status("sync") == SyncStatus(loading=True, message="Enqueued sync...")
        return {"count": 3}

    status = await tracker.run(SYNC_JOB, call)

    assert status == SyncStatus(loading=False, message="Synced 3")
    assert [s.loading for _, s in seen] == [True, False]
    assert all(key == "sync" for key, _ in seen)


@pytest.mark.anyio
async def test_failure_uses_extracted_message():
    tracker = JobStatusTracker()

    async def call():
        raise ApiError("Rakuten credentials missing", status_code=500)

    status = await tracker.run(SYNC_JOB, call)

    assert status == SyncStatus(loading=False, message="Rakuten credentials missing")
    assert not tracker.is_running("sync")


@pytest.mark.anyio
async def test_failure_without_message_uses_job_fallback():
    tracker = JobStatusTracker()

    async def call():
        raise ApiError("")

    status = await tracker.run(SYNC_JOB, call)

    assert status.message == "Sync failed"


@pytest.mark.anyio
async def test_unexpected_error_settles_before_propagating():
    tracker = JobStatusTracker()

    async def call():
        return {"unexpected": True}

    with pytest.raises(KeyError):
        await tracker.run(SYNC_JOB, call)

    assert tracker.status("sync") == SyncStatus(loading=False, message="Sync failed")


@pytest.mark.anyio
async def test_idle_keys_have_no_record():
    tracker = JobStatusTracker()
    assert tracker.status("sync") is None
    assert not tracker.is_running("sync")


@pytest.mark.anyio
async def test_same_key_last_completion_wins():
    tracker = JobStatusTracker()
    release_first = anyio.Event()
    release_second = anyio.Event()

    async def first():
        await release_first.wait()
        return {"count": 1}

    async def second():
        await release_second.wait()
        return {"count": 2}

    async with anyio.create_task_group() as tg:
        tg.start_soon(tracker.run, SYNC_JOB, first)
        tg.start_soon(tracker.run, SYNC_JOB, second)
        await anyio.sleep(0.01)
        assert tracker.is_running("sync")

        release_second.set()
        await anyio.sleep(0.01)
        assert tracker.status("sync") == SyncStatus(loading=False, message="Synced 2")

        release_first.set()

    assert tracker.status("sync") == SyncStatus(loading=False, message="Synced 1")


@pytest.mark.anyio
async def test_different_keys_settle_independently():
    tracker = JobStatusTracker()
    release = anyio.Event()

    async def slow():
        await release.wait()
        return {"count": 5}

    async def fast():
        return {"count": 7}

    async with anyio.create_task_group() as tg:
        tg.start_soon(tracker.run, SYNC_JOB, slow, "a")
        await anyio.sleep(0.01)
        await tracker.run(SYNC_JOB, fast, "b")

        assert tracker.is_running("a")
        assert tracker.status("b") == SyncStatus(loading=False, message="Synced 7")
        release.set()

    assert tracker.status("a").message == "Synced 5"
