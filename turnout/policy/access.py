import ipaddress
import re

from turnout.domain.types import RequestView
from turnout.schemas import MaintenanceSettings


def path_allowed(settings: MaintenanceSettings, view: RequestView) -> bool:
    # search, not match: a pattern may hit anywhere in the path.
    return any(re.search(pattern, view.path) for pattern in settings.allowed_paths)


def _client_address(host: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    try:
        address = ipaddress.ip_address(host.strip())
    except ValueError:
        return None
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        return address.ipv4_mapped
    return address


def ip_allowed(settings: MaintenanceSettings, view: RequestView) -> bool:
    address = _client_address(view.client_host or "")
    if address is None:
        return False

    for entry in settings.allowed_ips:
        network = ipaddress.ip_network(entry, strict=False)
        if network.version == address.version and address in network:
            return True
    return False


def is_exempt(settings: MaintenanceSettings, view: RequestView) -> bool:
    return path_allowed(settings, view) or ip_allowed(settings, view)
