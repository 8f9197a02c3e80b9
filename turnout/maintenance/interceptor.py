from pathlib import Path
from typing import Callable, TypeVar

from turnout.domain.types import MaintenanceResponse, RequestView
from turnout.policy.access import is_exempt
from turnout.responses.composer import compose
from turnout.settings.store import SettingsStore

T = TypeVar("T")


class Interceptor:
    """Per-request maintenance gate.

    Nothing is cached between calls: every request re-reads the settings
    file and the template, so toggling maintenance takes effect on the next
    request.
    """

    def __init__(self, app_root: Path | str) -> None:
        self.app_root = Path(app_root)
        self.store = SettingsStore(self.app_root)

    def intercept(self, view: RequestView) -> MaintenanceResponse | None:
        settings = self.store.load()
        if not self.store.is_active():
            return None
        if is_exempt(settings, view):
            return None
        return compose(settings, view, self.app_root)

    def handle(self, view: RequestView, forward: Callable[[RequestView], T]) -> MaintenanceResponse | T:
        response = self.intercept(view)
        if response is not None:
            return response
        return forward(view)
