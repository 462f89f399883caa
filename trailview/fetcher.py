"""Runs log source queries off the dispatch thread"""

import dataclasses
import logging
import queue
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor

from trailview.models.log_entry import LogEntry
from trailview.source import LogSource, LogSourceError

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class FetchResult:
    """Completion of one submitted query"""

    request_id: int
    query: str
    entries: list[LogEntry]
    error: str | None = None


class Fetcher(ABC):
    """Accepts queries and hands back their results as events"""

    @abstractmethod
    def submit(self, request_id: int, query: str) -> None:
        """Start fetching `query`; its result is tagged with `request_id`"""

    @abstractmethod
    def poll(self, timeout: float = 0) -> list[FetchResult]:
        """Return the results completed so far, waiting up to `timeout` for the first"""

    @abstractmethod
    def close(self) -> None:
        """Stop accepting queries and drop the pending ones"""


class BackgroundFetcher(Fetcher):
    """Fetcher running queries on a single worker thread

    Completed results are queued and collected by `poll` on the dispatch
    thread. Submitting a query cancels every query that has not started yet.
    """

    def __init__(self, source: LogSource) -> None:
        self._source = source
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="trailview-fetch"
        )
        self._results: queue.Queue[FetchResult] = queue.Queue()
        self._pending: list[Future] = []

    def __enter__(self) -> "BackgroundFetcher":
        return self

    def __exit__(self, *_) -> None:
        self.close()

    def submit(self, request_id: int, query: str) -> None:
        for future in self._pending:
            future.cancel()
        self._pending = [f for f in self._pending if not f.done()]

        logger.info("Fetching request %d: %r", request_id, query)
        future = self._executor.submit(self._fetch, request_id, query)
        future.add_done_callback(self._on_done)
        self._pending.append(future)

    def _fetch(self, request_id: int, query: str) -> FetchResult:
        try:
            entries = self._source.fetch(query)
        except LogSourceError as e:
            logger.warning("Request %d failed: %s", request_id, e)
            return FetchResult(request_id, query, [], str(e))
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Request %d crashed", request_id)
            return FetchResult(request_id, query, [], "Unexpected error, see log")
        logger.info("Request %d returned %d entries", request_id, len(entries))
        return FetchResult(request_id, query, entries)

    def _on_done(self, future: Future) -> None:
        if not future.cancelled():
            self._results.put(future.result())

    def poll(self, timeout: float = 0) -> list[FetchResult]:
        results = []
        try:
            if timeout > 0:
                results.append(self._results.get(timeout=timeout))
            while True:
                results.append(self._results.get_nowait())
        except queue.Empty:
            pass
        return results

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
