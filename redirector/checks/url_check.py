from __future__ import annotations

import logging
import queue
import threading
from typing import Sequence

from redirector.checks.http_probe import HttpProbe
from redirector.checks.results import CheckSummary, ProbeResult

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 12
DEFAULT_TIMEOUT_S = 0.2


class UrlChecker:
    """
    Checks that a batch of remote urls return a 200 status.

    ``workers`` threads share one :class:`HttpProbe` and drain a queue holding
    the whole batch. Every result is handed back to the calling thread, which
    is the only place the summary is counted. A ``workers`` or ``timeout_s`` of
    0 falls back to ``DEFAULT_WORKERS`` (12) and ``DEFAULT_TIMEOUT_S`` (200ms).
    """

    def __init__(self, workers: int = 0, timeout_s: float = 0) -> None:
        if workers < 0:
            raise ValueError(f"workers must not be negative, got {workers}")
        if timeout_s < 0:
            raise ValueError(f"timeout_s must not be negative, got {timeout_s}")
        self._workers = workers or DEFAULT_WORKERS
        self._timeout_s = timeout_s or DEFAULT_TIMEOUT_S
        self._probe = HttpProbe(max_connections=self._workers, timeout_s=self._timeout_s)

    @property
    def workers(self) -> int:
        return self._workers

    @property
    def timeout_s(self) -> float:
        return self._timeout_s

    def run(self, urls: Sequence[str]) -> CheckSummary:
        """Probe every url in ``urls`` and return the processed/failed counts."""
        summary = CheckSummary()
        if not urls:
            return summary

        work: queue.Queue[str] = queue.Queue(maxsize=len(urls))
        for url in urls:
            work.put_nowait(url)
        results: queue.Queue[ProbeResult] = queue.Queue()

        for n in range(self._workers):
            threading.Thread(
                target=self._drain,
                args=(work, results),
                name=f"url-check-{n}",
                daemon=True,
            ).start()

        while summary.processed < len(urls):
            result = results.get()
            summary.add(result)
            if result.error is not None:
                logger.warning("%s: %s", result.url, result.error)
            elif result.failed:
                logger.warning("%s: status %s", result.url, result.status_code)

        return summary

    def _drain(self, work: queue.Queue[str], results: queue.Queue[ProbeResult]) -> None:
        while True:
            try:
                url = work.get_nowait()
            except queue.Empty:
                return
            try:
                result = self._probe.probe(url)
            except Exception as e:
                # The url still has to be counted or run() would wait forever.
                logger.exception("Unexpected error probing %s", url)
                result = ProbeResult(url=url, error=str(e), error_kind="transport")
            results.put(result)

    def close(self) -> None:
        self._probe.close()
