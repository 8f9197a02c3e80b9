import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from bs4 import BeautifulSoup

from turnout.domain.types import MaintenanceResponse, RequestView
from turnout.maintenance.errors import MaintenanceConfigError
from turnout.schemas import MaintenanceSettings

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "public"
REASON_ELEMENT_ID = "reason"


class ResponseKind(str, Enum):
    json = "json"
    html = "html"


def negotiate(accept: str | None) -> ResponseKind:
    # Plain substring test on the raw header, no media-range parsing.
    if accept is not None and "html" not in accept:
        return ResponseKind.json
    return ResponseKind.html


def inject_reason_json(content: bytes, reason: str) -> bytes:
    try:
        document = json.loads(content)
    except json.JSONDecodeError as exc:
        raise MaintenanceConfigError("JSON maintenance template is not valid JSON.") from exc
    if not isinstance(document, dict):
        raise MaintenanceConfigError("JSON maintenance template must be an object to carry a reason.")
    document["reason"] = reason
    return json.dumps(document, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def inject_reason_html(content: bytes, reason: str) -> bytes:
    soup = BeautifulSoup(content, "html.parser")
    target = soup.find(id=REASON_ELEMENT_ID)
    if target is None:
        raise MaintenanceConfigError(f"HTML maintenance template has no element with id '{REASON_ELEMENT_ID}'.")

    fragment = BeautifulSoup(reason, "html.parser")
    target.clear()
    for node in list(fragment.contents):
        target.append(node)
    return str(soup).encode("utf-8")


@dataclass(frozen=True)
class KindSpec:
    status_code: int
    content_type: str
    filename: str
    inject_reason: Callable[[bytes, str], bytes]


# JSON answers 200 while HTML answers 503; kept as the established contract.
KIND_SPECS: dict[ResponseKind, KindSpec] = {
    ResponseKind.json: KindSpec(200, "application/json", "maintenance.json", inject_reason_json),
    ResponseKind.html: KindSpec(503, "text/html", "maintenance.html", inject_reason_html),
}


def resolve_template(kind: ResponseKind, app_root: Path | str) -> Path:
    filename = KIND_SPECS[kind].filename
    override = Path(app_root) / "public" / filename
    if override.exists():
        return override
    return DEFAULT_TEMPLATE_DIR / filename


def compose(settings: MaintenanceSettings, view: RequestView, app_root: Path | str) -> MaintenanceResponse:
    kind = negotiate(view.accept)
    spec = KIND_SPECS[kind]

    content = resolve_template(kind, app_root).read_bytes()
    if settings.reason:
        content = spec.inject_reason(content, settings.reason)

    return MaintenanceResponse(status_code=spec.status_code, content_type=spec.content_type, body=content)
