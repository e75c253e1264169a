from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ErrorKind = Literal["transport", "body_read"]


@dataclass
class ProbeResult:
    url: str
    latency_ms: int = 0
    status_code: int | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def failed(self) -> bool:
        # Only a plain 200 counts as a healthy redirect target.
        return self.error is not None or self.status_code != 200


@dataclass
class CheckSummary:
    processed: int = 0
    failed: int = 0

    def add(self, result: ProbeResult) -> None:
        self.processed += 1
        if result.failed:
            self.failed += 1
