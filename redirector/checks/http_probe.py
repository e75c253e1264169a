from __future__ import annotations

import time

import requests
from requests.adapters import HTTPAdapter

from redirector.checks.results import ProbeResult

CHUNK_SIZE = 1024


class HttpProbe:
    """
    A shared requests session for probing redirect targets.

    The mounted adapter blocks once ``max_connections`` connections to a host
    are checked out, so no more than that many requests to one host are ever
    in flight together. Every response body is read to the end so its
    connection goes back to the pool.

    ``timeout_s`` bounds each connect and socket read and is also a deadline
    for the whole probe, body included. The deadline is checked between body
    chunks, so a read can overrun it by at most one chunk.
    """

    def __init__(self, max_connections: int, timeout_s: float) -> None:
        self.timeout_s = timeout_s
        self.session = requests.Session()
        adapter = HTTPAdapter(
            pool_connections=max_connections,
            pool_maxsize=max_connections,
            pool_block=True,
            max_retries=0,
        )
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def probe(self, url: str) -> ProbeResult:
        start = time.perf_counter()
        deadline = start + self.timeout_s
        try:
            resp = self.session.get(
                url, timeout=(self.timeout_s, self.timeout_s), stream=True
            )
        except requests.RequestException as e:
            return ProbeResult(
                url=url,
                latency_ms=_elapsed_ms(start),
                error=str(e),
                error_kind="transport",
            )

        with resp:
            try:
                for _ in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if time.perf_counter() > deadline:
                        return ProbeResult(
                            url=url,
                            latency_ms=_elapsed_ms(start),
                            error=f"timed out after {self.timeout_s:g}s reading body",
                            error_kind="transport",
                        )
            except requests.RequestException as e:
                return ProbeResult(
                    url=url,
                    latency_ms=_elapsed_ms(start),
                    status_code=resp.status_code,
                    error=f"body discard error: {e}",
                    error_kind="body_read",
                )

        if time.perf_counter() > deadline:
            return ProbeResult(
                url=url,
                latency_ms=_elapsed_ms(start),
                error=f"timed out after {self.timeout_s:g}s",
                error_kind="transport",
            )
        return ProbeResult(
            url=url, latency_ms=_elapsed_ms(start), status_code=resp.status_code
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> HttpProbe:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
