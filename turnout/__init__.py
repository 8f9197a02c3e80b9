from turnout.domain.types import MaintenanceResponse, RequestView
from turnout.maintenance.errors import MaintenanceConfigError
from turnout.maintenance.interceptor import Interceptor
from turnout.middleware.maintenance import MaintenanceMiddleware, install_maintenance_middleware

__all__ = [
    "Interceptor",
    "MaintenanceConfigError",
    "MaintenanceMiddleware",
    "MaintenanceResponse",
    "RequestView",
    "install_maintenance_middleware",
]
