# ==============================================================================
# FILE: __main__.py
# PURPOSE: Main entry point. Picks an interface and a safe port, serves the
# status app there and keeps probing it.
# ==============================================================================
import argparse
import asyncio
import logging
import sys

import uvicorn

from .core.errors import NetProbeError
from .interface_selector import list_interfaces, select_interface
from .logging import configure_logger
from .probe import NetworkProbe
from .web.api import create_app


def _notify(message: str) -> None:
    print(f"NetProbe: {message}")


def _fallback() -> None:
    print("NetProbe: [Warning] The server stopped answering on the selected network.")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="netprobe", description="Pick a network interface and a free port, then watch them stay live.")
    parser.add_argument("--prefer", default=None,
                        help="interface-name prefix to prefer, or 'localhost' / 'base'")
    parser.add_argument("--port", type=int, default=None, help="port the safe-port search starts from")
    parser.add_argument("--retry-window", type=int, default=None, dest="retry_window_ms",
                        help="milliseconds between liveness probes")
    parser.add_argument("--verbose", "-v", action="store_true", default=None,
                        help="print a notice for every network state change")
    parser.add_argument("--list", action="store_true", help="list network interfaces and exit")
    parser.add_argument("--interactive", "-i", action="store_true",
                        help="choose the network interface from a numbered list")
    return parser.parse_args(argv)


async def serve(probe: NetworkProbe) -> None:
    record = probe.auto_detect()
    port = await probe.use_safe_port()

    print("\n--- NetProbe ---")
    print(f"Interface: {record.interface_name or 'n/a'} ({record.address})")
    print(f"==> Serving status on: {probe.url} <==")
    print("----------------")

    config = uvicorn.Config(create_app(probe), host=record.address, port=port,
                            log_level="info" if probe.verbose else "warning")
    await uvicorn.Server(config).serve()


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        probe = NetworkProbe.from_env(
            port=args.port,
            verbose=args.verbose,
            preference=args.prefer,
            retry_window_ms=args.retry_window_ms,
            on_fallback=_fallback,
            on_notify=_notify,
        )
        configure_logger(logging.INFO if probe.verbose else logging.WARNING)

        if args.list:
            record = probe.auto_detect()
            list_interfaces(probe.catalog, chosen=record.interface_name)
            return 0

        if args.interactive:
            selected_iface = select_interface(probe.catalog)
            if selected_iface == probe.catalog.loopback_name():
                probe.prefer("localhost")
            else:
                # exact names win over prefix matches in the selector
                probe.prefer(selected_iface)

        asyncio.run(serve(probe))
    except (NetProbeError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        pass
    print("Monitoring stopped.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
