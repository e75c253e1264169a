from __future__ import annotations

import logging
from typing import Sequence

from redirector.checks.results import CheckSummary
from redirector.checks.url_check import UrlChecker

logger = logging.getLogger(__name__)


def verify_targets(targets: Sequence[str], workers: int, timeout_s: float) -> CheckSummary:
    """Probe every redirect target once and log how many failed."""
    checker = UrlChecker(workers=workers, timeout_s=timeout_s)
    try:
        summary = checker.run(targets)
    finally:
        checker.close()
    logger.info(
        "url check reported %d errors in %d url checks",
        summary.failed,
        summary.processed,
    )
    return summary
