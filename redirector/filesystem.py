from __future__ import annotations

from pathlib import Path

from redirector.exceptions import ResourceDirectoryError

PACKAGE_DIR = Path(__file__).resolve().parent


def resource_dir(development: bool, name: str, base: Path | None = None) -> Path:
    """
    Locate the ``templates``, ``static`` or ``data`` directory.

    Outside development the copy bundled with the installed package is used.
    In development the directory is read live from ``base`` (the working
    directory by default) so edits show up without a reinstall.
    """
    if not development:
        return PACKAGE_DIR / name

    if not name:
        raise ResourceDirectoryError(name)
    path = (base or Path.cwd()) / name
    if not path.is_dir():
        raise ResourceDirectoryError(str(path))
    return path
