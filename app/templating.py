# =============================================================================
# app/templating.py - Jinja2 Template Environment
# =============================================================================
# One Jinja2Templates instance shared by routers and error handlers.
# Templates live in app/templates/, named after the view they render.
# =============================================================================

from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
