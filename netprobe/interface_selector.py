# FILE: interface_selector.py
# PURPOSE: Prints the interface table and lets the user pick one by number.

import sys
from typing import List, Optional

from .core.catalog import InterfaceCatalog


def _interface_rows(catalog: InterfaceCatalog, chosen: Optional[str] = None) -> List[str]:
    rows = []
    for i, iface_name in enumerate(catalog.names()):
        status_text = "[ON]" if catalog.is_up(iface_name) else "[OFF]"

        # Show the first IPv4 address to make the choice clearer
        record = catalog.first_ipv4(iface_name)
        ip_address = f"(IP: {record.address})" if record else ""

        marker = "  <== auto-detected" if iface_name == chosen else ""
        rows.append(f"  {i + 1}: {status_text} {iface_name} {ip_address}{marker}")
    return rows


def list_interfaces(catalog: InterfaceCatalog, chosen: Optional[str] = None) -> None:
    """Prints every interface with its status (online/offline) and IPv4 address."""
    print(f"Detected {len(catalog)} network interfaces:")
    for row in _interface_rows(catalog, chosen):
        print(row)


def select_interface(catalog: InterfaceCatalog) -> str:
    """
    Lists all network interfaces with their status (online/offline).
    Returns the name of the user selected interface.
    """
    interface_list = catalog.names()
    if not interface_list:
        print("Error: No network interfaces found on this system.")
        sys.exit(1)

    print("Please select the network interface you want to use:")
    for row in _interface_rows(catalog):
        print(row)

    while True:
        try:
            choice = int(input(f"Enter the number (1-{len(interface_list)}): "))
            if 1 <= choice <= len(interface_list):
                return interface_list[choice - 1]
            else:
                print("Invalid number. Please try again.")
        except ValueError:
            print("Invalid input. Please enter a number.")
        except (EOFError, KeyboardInterrupt):
            print("\nSelection cancelled. Exiting.")
            sys.exit(0)
