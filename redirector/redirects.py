from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import Iterable

from redirector.exceptions import RedirectFileError

SHORT_CODE_RE = re.compile(r"^[-A-Za-z0-9]+$")


def load_redirects(lines: Iterable[str]) -> dict[str, str]:
    """
    Build a map of short codes to target urls from ``short,target`` csv rows.

    Short codes are trimmed of spaces and any trailing "/", must be unique,
    and may only contain letters, numbers and "-". Targets are trimmed and
    must start with "http". Blank lines are ignored.
    """
    out: dict[str, str] = {}
    try:
        for record in csv.reader(lines):
            if not record:
                continue
            if len(record) != 2:
                raise RedirectFileError("csv record does not have 2 fields", record)

            short = record[0].strip().rstrip("/")
            target = record[1].strip()

            if short in out:
                raise RedirectFileError(f"short url {short} already exists", record)
            if " " in short:
                raise RedirectFileError(f"short url {short} has a space", record)
            if not SHORT_CODE_RE.match(short):
                raise RedirectFileError(f"short url {short} has invalid characters", record)
            if not target.startswith("http"):
                raise RedirectFileError(f"target {target} does not start with http", record)

            out[short] = target
    except csv.Error as e:
        raise RedirectFileError(f"csv reading error: {e}") from e

    return out


def load_redirects_file(path: Path) -> dict[str, str]:
    if not path.exists():
        raise FileNotFoundError(f"Missing redirect file at {path}")
    with path.open(newline="", encoding="utf-8") as f:
        return load_redirects(f)
