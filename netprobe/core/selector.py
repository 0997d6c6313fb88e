# ==============================================================================
# FILE: core/selector.py
# PURPOSE: Picks the network interface (and IPv4 address) to bind to.
# ==============================================================================
import logging
from dataclasses import replace
from threading import Lock
from typing import Optional

from .catalog import InterfaceCatalog
from .data_models import (
    BASE_ALIAS, LOCALHOST_ALIAS, InterfaceRecord, MissingPreferencePolicy, SelectionState
)
from .errors import InvalidPreference, NoInterfaceFound
from .validator import is_ipv4_address

logger = logging.getLogger(__name__)

# Checked in order; the first pattern with a matching interface wins.
WIRED_PREFIXES = ("enp", "eth", "ETH", "Ethernet", "en")

ALIASES = {
    "localhost": LOCALHOST_ALIAS,
    "base": BASE_ALIAS,
    "0.0.0.0": BASE_ALIAS,
}

_UNSET = object()


def validate_preference(face) -> str:
    if isinstance(face, str) and face:
        return face
    raise InvalidPreference(face)


class InterfaceSelector:
    """Chooses one interface record from a catalog snapshot.

    Order of preference:
      1. an explicit preference, matched as an interface-name prefix
      2. the `localhost` / `base` aliases on the loopback interface
      3. something that looks like a wired NIC
      4. any other interface with an IPv4 address
      5. the loopback interface itself
    """

    def __init__(self, catalog: InterfaceCatalog, preference: Optional[str] = None,
                 missing_policy: MissingPreferencePolicy = MissingPreferencePolicy.LOCALHOST_ALIAS):
        if preference is not None:
            preference = validate_preference(preference)
        self.catalog = catalog
        self._lock = Lock()
        self._state = SelectionState(preference=preference, missing_policy=MissingPreferencePolicy(missing_policy))

    @property
    def state(self) -> SelectionState:
        with self._lock:
            return replace(self._state)

    @property
    def chosen(self) -> Optional[InterfaceRecord]:
        with self._lock:
            return self._state.chosen_interface

    @property
    def preference(self) -> Optional[str]:
        with self._lock:
            return self._state.preference

    def prefer(self, face: str) -> None:
        face = validate_preference(face)
        with self._lock:
            self._state.preference = face

    def select(self, preference=_UNSET) -> InterfaceRecord:
        """Returns the chosen record and stores it as the selection state."""
        with self._lock:
            if preference is _UNSET:
                preference = self._state.preference
            elif preference is not None:
                preference = validate_preference(preference)
            record = self._choose(preference, self._state.missing_policy)
            self._state.preference = preference
            self._state.chosen_interface = record
            return record

    def _choose(self, preference: Optional[str], policy: MissingPreferencePolicy) -> InterfaceRecord:
        catalog = self.catalog
        names = catalog.names()
        external = catalog.external_names()
        logger.debug("Found %d network interfaces: %s", len(names), ", ".join(names))

        if preference is not None:
            logger.debug("Attempting to prefer %s as supplied if it exists", preference)
            # an exact name beats a longer name sharing the prefix (eth0 vs eth0.100)
            preferred = preference if preference in external else next(
                (name for name in external if name.startswith(preference)), None
            )
            if preferred is not None:
                record = catalog.first_ipv4(preferred)
                if record is None:
                    raise NoInterfaceFound(interface=preferred)
                logger.info("Found preferred network interface %s, using %s", preferred, record.address)
                return record

            alias = ALIASES.get(preference)
            if alias is not None and policy == MissingPreferencePolicy.LOCALHOST_ALIAS:
                loopback = catalog.loopback_record()
                if loopback is None:
                    raise NoInterfaceFound("Loopback interface has no IPv4 address",
                                           interface=catalog.loopback_name())
                logger.info("Preferred %s as supplied, binding to %s", preference, alias)
                return loopback.with_address(alias)

            logger.info("Preferred network interface %s not found, falling back to auto-detection",
                        preference)

        for prefix in WIRED_PREFIXES:
            for name in external:
                if not name.startswith(prefix):
                    continue
                record = catalog.first_ipv4(name)
                if record is not None:
                    logger.info("Found what seems to be a wired network, using %s", name)
                    return record
                logger.debug("Wired-looking interface %s has no IPv4 address, skipping", name)

        for name in external:
            for record in catalog.records(name):
                if is_ipv4_address(record.address):
                    if not record.interface_name:
                        record = replace(record, interface_name=name)
                    logger.info("Couldn't find a wired network, using %s from interface %s",
                                record.address, name)
                    return record

        loopback = catalog.loopback_record()
        if loopback is not None:
            logger.info("No external network interfaces found, falling back to the loopback interface")
            return loopback

        raise NoInterfaceFound()
