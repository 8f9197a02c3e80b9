import os
from pathlib import Path
from uuid import uuid4

import yaml
from pydantic import ValidationError

from turnout.maintenance.errors import MaintenanceConfigError
from turnout.schemas import MaintenanceSettings
from turnout.settings.store import settings_path


def start_maintenance(
    app_root: Path | str,
    *,
    reason: str | None = None,
    allowed_paths: list[str] | None = None,
    allowed_ips: list[str] | None = None,
) -> Path:
    try:
        settings = MaintenanceSettings(
            allowed_paths=allowed_paths or [],
            allowed_ips=allowed_ips or [],
            reason=reason,
        )
    except ValidationError as exc:
        raise MaintenanceConfigError(f"Refusing to write invalid settings: {exc}") from exc

    payload = settings.model_dump(exclude_none=True)
    path = settings_path(app_root)
    _atomic_write_text(path, yaml.safe_dump(payload, allow_unicode=True, sort_keys=False))
    return path


def stop_maintenance(app_root: Path | str) -> bool:
    path = settings_path(app_root)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True


def _atomic_write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f"{path.name}.tmp.{uuid4().hex}")
    try:
        with tmp.open("w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    finally:
        if tmp.exists():
            tmp.unlink()
