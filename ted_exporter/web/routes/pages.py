from __future__ import annotations

from html import escape
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ted_exporter.api.deps import get_settings
from ted_exporter.core.config import Settings
from ted_exporter.version import __version__

router = APIRouter()

LANDING_PAGE = """<html>
<head><title>TED Exporter</title></head>
<body>
<h1>TED Exporter</h1>
<p><a href="{metrics_path}">Metrics</a></p>
<p>Version {version}</p>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
def landing_page(settings: Annotated[Settings, Depends(get_settings)]) -> HTMLResponse:
    return HTMLResponse(
        LANDING_PAGE.format(
            metrics_path=escape(settings.metrics_path, quote=True),
            version=escape(__version__),
        )
    )
