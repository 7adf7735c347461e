"""
Assisted Installer client modules.
"""
from .assisted import AssistedClient, get_access_token
from .resolve import find_cluster, find_host
from .wait import WaitPolicy, wait_for_cluster_status, wait_for_host_status
from .hostfilter import MatchSpec, filter_hosts, parse_match

__all__ = [
    'AssistedClient',
    'get_access_token',
    'find_cluster',
    'find_host',
    'WaitPolicy',
    'wait_for_cluster_status',
    'wait_for_host_status',
    'MatchSpec',
    'filter_hosts',
    'parse_match',
]
