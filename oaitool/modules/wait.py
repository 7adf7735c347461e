"""Poll a resource until it reaches a wanted status."""
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, TypeVar

from ..exceptions import TooManyRetriesError, WaitTimeoutError
from .models import Cluster
from .validators import ClusterStatus, HostStatus, validate

logger = logging.getLogger(__name__)

T = TypeVar('T')


class WaitState(str, Enum):
    """States of the polling loop."""
    CHECKING = 'checking'
    WAITING = 'waiting'
    SUCCEEDED = 'succeeded'
    TIMED_OUT = 'timed_out'
    RETRIES_EXHAUSTED = 'retries_exhausted'


@dataclass
class WaitPolicy:
    """How long and how often to poll.

    ``retries`` and ``timeout`` of 0 mean unlimited.
    """
    interval: float = 5
    retries: int = 0
    timeout: float = 0


def next_state(policy: WaitPolicy, elapsed: float, retry_count: int, satisfied: bool) -> WaitState:
    """
    Decide what the loop does after a check.

    Args:
        policy: Polling limits
        elapsed: Seconds since the loop started
        retry_count: Unsatisfied checks so far, including this one
        satisfied: Whether the condition held at this check

    Returns:
        SUCCEEDED, TIMED_OUT, RETRIES_EXHAUSTED or WAITING
    """
    if satisfied:
        return WaitState.SUCCEEDED
    if policy.timeout > 0 and elapsed > policy.timeout:
        return WaitState.TIMED_OUT
    if policy.retries > 0 and retry_count > policy.retries:
        return WaitState.RETRIES_EXHAUSTED
    return WaitState.WAITING


def wait_for(
    resource: T,
    refresh: Callable[[], T],
    condition: Callable[[T], bool],
    policy: WaitPolicy,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Block until ``condition`` holds for the polled resource.

    The condition is checked on ``resource`` right away. Each time it does
    not hold, the loop sleeps ``policy.interval`` seconds and calls
    ``refresh`` for a new copy. The timeout is only looked at after a
    check, so a wait can run up to one interval past it.

    Args:
        resource: Current copy of the resource
        refresh: Fetches a new copy; its errors end the wait
        condition: Predicate on the resource
        policy: Interval, retry and timeout limits
        clock: Time source in seconds
        sleep: Sleep function

    Returns:
        The copy of the resource that satisfied the condition

    Raises:
        WaitTimeoutError: when more than ``policy.timeout`` seconds have elapsed
        TooManyRetriesError: when more than ``policy.retries`` checks failed
    """
    start = clock()
    retry_count = 0
    state = WaitState.CHECKING

    while True:
        if state == WaitState.WAITING:
            sleep(policy.interval)
            resource = refresh()

        satisfied = condition(resource)
        if not satisfied:
            retry_count += 1
        state = next_state(policy, clock() - start, retry_count, satisfied)
        logger.debug(f"wait state {state.value} after {retry_count} unsuccessful checks")

        if state == WaitState.SUCCEEDED:
            return resource
        if state == WaitState.TIMED_OUT:
            raise WaitTimeoutError("timed out waiting for status")
        if state == WaitState.RETRIES_EXHAUSTED:
            raise TooManyRetriesError("too many retries waiting for status")


def wait_for_cluster_status(
    client,
    cluster: Cluster,
    status: str,
    policy: WaitPolicy,
    **kwargs,
) -> Cluster:
    """Wait until the cluster's status equals ``status``."""
    validate(ClusterStatus, status)
    logger.info(f"waiting for cluster {cluster.name} to reach status {status}")

    def reached(current: Cluster) -> bool:
        logger.debug(f"checking status, have {current.status} want {status}")
        return current.status == status

    return wait_for(cluster, lambda: client.get_cluster(cluster.id), reached, policy, **kwargs)


def count_hosts_with_status(cluster: Cluster, status: str) -> int:
    count = 0
    for host in cluster.hosts:
        logger.debug(f"checking status for {host.id}, have {host.status} want {status}")
        if host.status == status:
            count += 1
    return count


def wait_for_host_status(
    client,
    cluster: Cluster,
    status: str,
    policy: WaitPolicy,
    count: int = 0,
    **kwargs,
) -> Cluster:
    """
    Wait until at least ``count`` hosts of the cluster have ``status``.

    A ``count`` of 0 means every host the cluster has right now; that
    number is fixed for the whole wait even if hosts come or go.
    """
    validate(HostStatus, status)
    wanted = count or len(cluster.hosts)
    logger.info(f"waiting for {wanted} hosts in cluster {cluster.name} to reach status {status}")

    return wait_for(
        cluster,
        lambda: client.get_cluster(cluster.id),
        lambda current: count_hosts_with_status(current, status) >= wanted,
        policy,
        **kwargs,
    )
