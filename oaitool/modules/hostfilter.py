"""Select hosts of a cluster by inventory attributes."""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List

from ..exceptions import InventoryError, NoHostsMatchedError, ValidationError
from .models import Host, HostInventory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchSpec:
    key: str
    value: str


def parse_match(spec: str) -> MatchSpec:
    """Parse a ``key=value`` match specification."""
    key, sep, value = spec.partition('=')
    if not sep:
        raise ValidationError(f"invalid match specification: {spec}")
    return MatchSpec(key, value)


def _match_mac(inventory: HostInventory, value: str) -> bool:
    return value in inventory.mac_addresses()


def _match_bmc_address(inventory: HostInventory, value: str) -> bool:
    return inventory.bmc_address == value


def _match_vendor(inventory: HostInventory, value: str) -> bool:
    return inventory.system_vendor.manufacturer == value


def _match_product(inventory: HostInventory, value: str) -> bool:
    return inventory.system_vendor.product_name == value


PREDICATES: Dict[str, Callable[[HostInventory, str], bool]] = {
    'mac': _match_mac,
    'bmc_address': _match_bmc_address,
    'bmc-address': _match_bmc_address,
    'vendor': _match_vendor,
    'product': _match_product,
}


def select_hosts(hosts: Iterable[Host], spec: MatchSpec) -> List[Host]:
    """Return the hosts matching one specification, in input order.

    Hosts whose inventory cannot be parsed never match.
    """
    predicate = PREDICATES[spec.key]
    selected = []

    logger.debug(f"searching for {spec.key} = {spec.value}")
    for host in hosts:
        try:
            inventory = host.get_inventory()
        except InventoryError as e:
            logger.debug(f"skipping host {host.id}: {e}")
            continue

        if predicate(inventory, spec.value):
            selected.append(host)

    return selected


def check_specs(specs: Iterable[MatchSpec]) -> None:
    """Reject the query if any specification uses an unsupported key."""
    for spec in specs:
        if spec.key not in PREDICATES:
            raise ValidationError(f"unsupported search key: {spec.key}")


def filter_hosts(hosts: Iterable[Host], specs: Iterable[MatchSpec]) -> List[Host]:
    """
    Return the hosts that satisfy every specification.

    Each specification narrows the result of the previous one.

    Raises:
        ValidationError: if any specification uses an unsupported key
        NoHostsMatchedError: if specifications were given and no host is left
    """
    specs = list(specs)
    check_specs(specs)

    selected = list(hosts)
    for spec in specs:
        selected = select_hosts(selected, spec)

    if specs and not selected:
        raise NoHostsMatchedError("no hosts matched your criteria")
    return selected
