"""
Template rendering utilities
"""
from pathlib import Path
from typing import Any, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from karoli_portal.schemas.finance import PAYMENT_TYPE_LABELS
from karoli_portal.services import presenters

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def format_money(amount: Any, currency: str = "USD") -> str:
    try:
        value = float(amount or 0)
    except (TypeError, ValueError):
        return str(amount)
    return f"{currency} {value:,.2f}"


def format_date(value: Optional[str]) -> str:
    # ISO timestamps from the backend; the date part is enough for tables
    if not value:
        return ""
    return value[:10]


def file_size(num_bytes: Optional[int]) -> str:
    if not num_bytes:
        return ""
    size = float(num_bytes)
    for unit in ("B", "KB", "MB"):
        if size < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} GB"


templates.env.filters["time12"] = presenters.format_time
templates.env.filters["money"] = format_money
templates.env.filters["date"] = format_date
templates.env.filters["filesize"] = file_size
templates.env.filters["full_name"] = presenters.full_name
templates.env.filters["day_name"] = presenters.day_name
templates.env.filters["payment_type"] = lambda value: PAYMENT_TYPE_LABELS.get(value or "", value or "")
templates.env.globals["capacity_percent"] = presenters.capacity_percent


def render_template(template_name: str, context: dict, request: Request, status_code: int = 200):
    """Render template with context"""
    return templates.TemplateResponse(
        request, template_name, {"request": request, **context}, status_code=status_code
    )
