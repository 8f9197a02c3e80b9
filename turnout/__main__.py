import argparse
import os
import sys
from pathlib import Path

from turnout.maintenance.errors import MaintenanceConfigError
from turnout.settings.store import SettingsStore
from turnout.settings.toggle import start_maintenance, stop_maintenance


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="turnout", description="Toggle maintenance mode for an application.")
    parser.add_argument("--app-root", default=os.getenv("TURNOUT_APP_ROOT", "."))
    commands = parser.add_subparsers(dest="command", required=True)

    start = commands.add_parser("start", help="Write tmp/maintenance.yml and turn maintenance on.")
    start.add_argument("--reason", default=None)
    start.add_argument("--allowed-path", dest="allowed_paths", action="append", default=[])
    start.add_argument("--allowed-ip", dest="allowed_ips", action="append", default=[])

    commands.add_parser("stop", help="Remove tmp/maintenance.yml.")
    commands.add_parser("status", help="Print whether maintenance is on.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    app_root = Path(args.app_root)

    if args.command == "start":
        try:
            path = start_maintenance(
                app_root,
                reason=args.reason,
                allowed_paths=args.allowed_paths,
                allowed_ips=args.allowed_ips,
            )
        except MaintenanceConfigError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        print(f"maintenance on ({path})")
        return 0

    if args.command == "stop":
        removed = stop_maintenance(app_root)
        print("maintenance off" if removed else "maintenance was already off")
        return 0

    store = SettingsStore(app_root)
    if not store.is_active():
        print("off")
        return 0
    try:
        settings = store.load()
    except MaintenanceConfigError as exc:
        print(f"on (invalid settings: {exc})")
        return 1
    print("on")
    if settings.reason:
        print(f"reason: {settings.reason}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
