from functools import lru_cache
from pathlib import Path
from string import Template

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from empgen.api.deps import get_settings
from empgen.core.config import Settings
from empgen.core.version import get_full_version

STATIC_DIR = Path(__file__).resolve().parents[2] / "static"

router = APIRouter()


@lru_cache(maxsize=1)
def _load_template() -> Template:
    return Template((STATIC_DIR / "index.html").read_text(encoding="utf-8"))


def render_index(settings: Settings) -> str:
    return _load_template().safe_substitute(
        title=settings.PROJECT_NAME,
        version=get_full_version(),
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(settings: Settings = Depends(get_settings)) -> str:
    """Landing page with the generate and delete controls."""
    return render_index(settings)
