from pathlib import Path

import yaml
from pydantic import ValidationError

from turnout.maintenance.errors import MaintenanceConfigError
from turnout.schemas import MaintenanceSettings

SETTINGS_RELATIVE_PATH = Path("tmp") / "maintenance.yml"


def settings_path(app_root: Path | str) -> Path:
    return Path(app_root) / SETTINGS_RELATIVE_PATH


def load_settings(path: Path | str) -> MaintenanceSettings:
    """Read the maintenance settings file, or empty settings when it is absent.

    The file is read on every call. Broken YAML and invalid allow-list
    entries raise MaintenanceConfigError instead of turning maintenance off.
    """
    path = Path(path)
    if not path.exists():
        return MaintenanceSettings()

    try:
        with path.open("rb") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return MaintenanceSettings()
    except yaml.YAMLError as exc:
        raise MaintenanceConfigError(f"Settings file '{path}' contains invalid YAML.") from exc

    if data is None:
        return MaintenanceSettings()
    if not isinstance(data, dict):
        raise MaintenanceConfigError(f"Settings file '{path}' must contain a mapping at the root.")

    try:
        return MaintenanceSettings.model_validate(data)
    except ValidationError as exc:
        raise MaintenanceConfigError(f"Settings file '{path}' is invalid: {exc}") from exc


class SettingsStore:
    def __init__(self, app_root: Path | str) -> None:
        self.app_root = Path(app_root)

    @property
    def settings_file(self) -> Path:
        return settings_path(self.app_root)

    def is_active(self) -> bool:
        return self.settings_file.exists()

    def load(self) -> MaintenanceSettings:
        return load_settings(self.settings_file)
