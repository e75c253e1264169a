from __future__ import annotations

from pathlib import Path

from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader, select_autoescape


def build_templates(directory: Path, development: bool) -> Jinja2Templates:
    """
    Load html templates from ``directory``.

    In development a template is parsed again whenever its file has changed
    since it was last loaded; otherwise each template is parsed once.
    """
    env = Environment(
        loader=FileSystemLoader(str(directory)),
        autoescape=select_autoescape(["html"]),
        auto_reload=development,
    )
    return Jinja2Templates(env=env)
