from turnout.maintenance.errors import MaintenanceConfigError

__all__ = ["MaintenanceConfigError"]
