"""Status tracking for fire-and-forget backend jobs

Every job goes idle -> running -> settled. The running record carries a
provisional message; the settled record carries a message built from the
response payload, or the extracted error message on failure.

Records are keyed by operation identity. Starting a job under a key that
is already running overwrites the record: the tracker takes no lock and
the last completion wins.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Hashable, List, Optional

from client.errors import ApiError
from .models import SyncStatus

logger = logging.getLogger(__name__)

StatusListener = Callable[[Hashable, SyncStatus], None]


@dataclass(frozen=True)
class JobSpec:
    """One kind of backend job

    Attributes:
        name: Job identity, also the key of singleton jobs
        pending_message: Message shown while the job runs
        failure_message: Message used when an error carries none
        describe: Builds the success message from the response payload
    """
    name: str
    pending_message: str
    failure_message: str
    describe: Callable[[Any], str]


class JobStatusTracker:
    """Holds one SyncStatus per job key and notifies listeners of changes"""

    def __init__(self):
        self._records: Dict[Hashable, SyncStatus] = {}
        self._listeners: List[StatusListener] = []

    def add_listener(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def status(self, key: Hashable) -> Optional[SyncStatus]:
        """Current record for a key, None while idle"""
        return self._records.get(key)

    def is_running(self, key: Hashable) -> bool:
        record = self._records.get(key)
        return bool(record and record.loading)

    def snapshot(self) -> Dict[Hashable, SyncStatus]:
        return dict(self._records)

    def _set(self, key: Hashable, status: SyncStatus) -> None:
        self._records[key] = status
        for listener in self._listeners:
            listener(key, status)

    async def run(
        self,
        spec: JobSpec,
        call: Callable[[], Awaitable[Any]],
        key: Optional[Hashable] = None,
    ) -> SyncStatus:
        """Run one job and record its lifecycle

        Args:
            spec: Kind of job
            call: Coroutine factory performing the backend call
            key: Record key (default: the job name)

        Returns:
            The settled status
        """
        key = spec.name if key is None else key
        self._set(key, SyncStatus(loading=True, message=spec.pending_message))
        logger.info(f"Started {spec.name} ({key})")

        try:
            result = await call()
            message = spec.describe(result if result is not None else {})
        except ApiError as e:
            status = SyncStatus(loading=False, message=e.message or spec.failure_message)
            logger.warning(f"{spec.name} ({key}) failed: {status.message}")
        except Exception:
            # Settle before propagating so the record never stays running
            self._set(key, SyncStatus(loading=False, message=spec.failure_message))
            raise
        else:
            status = SyncStatus(loading=False, message=message)
            logger.info(f"{spec.name} ({key}) finished: {status.message}")

        self._set(key, status)
        return status
