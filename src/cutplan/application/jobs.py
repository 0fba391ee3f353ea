"""Background planning jobs with cooperative cancellation.

Large jobs can take a while. A PackingJob runs the planning command on a
worker thread and keeps the cancellation token, so the caller can stop the
engine before its next band.
"""

from __future__ import annotations

import logging
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor

from cutplan.application.commands import PlanCutsCommand
from cutplan.application.config.schema import CutPlanConfiguration
from cutplan.domain.entities import PackingResult
from cutplan.domain.services import CancellationToken, PackingCancelledError
from cutplan.domain.value_objects import PackingMode

logger = logging.getLogger(__name__)


class PackingJob:
    """Handle for a planning run executing on a thread pool.

    Use ``PackingJob.submit`` to create one. When no executor is given the
    job owns a single-thread pool that is shut down once the run finishes.
    """

    def __init__(
        self,
        future: Future[PackingResult],
        token: CancellationToken,
        owned_executor: Executor | None = None,
    ) -> None:
        self._future = future
        self._token = token
        if owned_executor is not None:
            future.add_done_callback(lambda _: owned_executor.shutdown(wait=False))

    @classmethod
    def submit(
        cls,
        command: PlanCutsCommand,
        config: CutPlanConfiguration,
        executor: Executor | None = None,
        mode: PackingMode | str | None = None,
    ) -> PackingJob:
        """Start planning ``config`` in the background.

        Args:
            command: Planning command to run.
            config: Validated job configuration.
            executor: Executor to run on; a private one is created if omitted.
            mode: Optional override of the job's packing mode.

        Returns:
            The running job.
        """
        token = CancellationToken()
        owned = None
        if executor is None:
            owned = ThreadPoolExecutor(max_workers=1, thread_name_prefix="cutplan")
            executor = owned
        future = executor.submit(command.execute, config, mode, token)
        logger.debug("Submitted packing job for %d units", config.total_quantity)
        return cls(future, token, owned)

    def cancel(self) -> None:
        """Ask the engine to stop before its next band."""
        logger.info("Cancelling packing job")
        self._token.cancel()
        self._future.cancel()

    @property
    def cancelled(self) -> bool:
        return self._token.cancelled

    def done(self) -> bool:
        """Check whether the run has finished, failed or been cancelled."""
        return self._future.done()

    def result(self, timeout: float | None = None) -> PackingResult:
        """Wait for the run and return its result.

        Args:
            timeout: Seconds to wait; None waits indefinitely.

        Raises:
            PackingCancelledError: If the job was cancelled.
            TimeoutError: If the result is not ready in time.
        """
        try:
            return self._future.result(timeout=timeout)
        except CancelledError:
            # cancelled before a worker picked it up
            raise PackingCancelledError()
