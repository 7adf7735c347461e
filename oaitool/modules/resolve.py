"""Look up clusters and hosts by either their id or their name."""
import logging
from typing import Callable, Iterable, TypeVar

from ..exceptions import NotFoundError
from .models import Cluster, Host

logger = logging.getLogger(__name__)

T = TypeVar('T')


def resolve(
    identifier: str,
    lookup: Callable[[str], T],
    listing: Callable[[], Iterable[T]],
    name_of: Callable[[T], str],
    id_of: Callable[[T], str],
    kind: str = "resource",
) -> T:
    """
    Resolve an identifier that may be either an id or a name.

    ``identifier`` is first treated as an id and passed to ``lookup``. If
    that fails for any reason, ``listing`` is scanned in order for the
    first item whose name equals ``identifier`` and that item is fetched
    again through ``lookup`` by its id.

    Args:
        identifier: Id or name given by the user
        lookup: Fetches one item by id
        listing: Returns every candidate item
        name_of: Extracts the name of an item
        id_of: Extracts the id of an item
        kind: Word used in the error message

    Returns:
        The fully fetched item

    Raises:
        NotFoundError: if neither the id lookup nor the name scan found anything
    """
    try:
        return lookup(identifier)
    except Exception as e:
        # Either a name or a bad id; fall back to searching by name
        logger.debug(f"{kind} lookup by id {identifier} failed ({e}), searching by name")

    for item in listing():
        if name_of(item) == identifier:
            logger.debug(f"found {kind} {identifier} with id {id_of(item)}")
            return lookup(id_of(item))

    raise NotFoundError(f"no {kind} matching {identifier}")


def find_cluster(client, identifier: str) -> Cluster:
    """Find a cluster by id or name."""
    return resolve(
        identifier,
        lookup=client.get_cluster,
        listing=client.list_clusters,
        name_of=lambda cluster: cluster.name,
        id_of=lambda cluster: cluster.id,
        kind="cluster",
    )


def find_host(client, cluster_id: str, identifier: str) -> Host:
    """Find a host of a cluster by id or requested hostname."""
    return resolve(
        identifier,
        lookup=lambda host_id: client.get_host(cluster_id, host_id),
        listing=lambda: client.get_cluster(cluster_id).hosts,
        name_of=lambda host: host.requested_hostname,
        id_of=lambda host: host.id,
        kind="host",
    )
