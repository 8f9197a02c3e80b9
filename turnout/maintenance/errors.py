class MaintenanceConfigError(Exception):
    pass
