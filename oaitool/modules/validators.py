"""Closed sets of values accepted by the Assisted Installer API."""

from enum import Enum
from typing import Type

from ..exceptions import ValidationError


class Choice(str, Enum):
    """String enum that prints as its bare value."""

    def __str__(self) -> str:
        return self.value


class NetworkType(Choice):
    OPENSHIFT_SDN = 'OpenShiftSDN'
    OVN_KUBERNETES = 'OVNKubernetes'


class ImageType(Choice):
    MINIMAL_ISO = 'minimal-iso'
    FULL_ISO = 'full-iso'


class ClusterStatus(Choice):
    INSUFFICIENT = 'insufficient'
    READY = 'ready'
    ERROR = 'error'
    PREPARING_FOR_INSTALLATION = 'preparing-for-installation'
    PENDING_FOR_INPUT = 'pending-for-input'
    INSTALLING = 'installing'
    FINALIZING = 'finalizing'
    INSTALLED = 'installed'
    ADDING_HOSTS = 'adding-hosts'
    CANCELLED = 'cancelled'
    INSTALLING_PENDING_USER_ACTION = 'installing-pending-user-action'


class HostStatus(Choice):
    DISCOVERING = 'discovering'
    KNOWN = 'known'
    DISCONNECTED = 'disconnected'
    INSUFFICIENT = 'insufficient'
    DISABLED = 'disabled'
    PREPARING_FOR_INSTALLATION = 'preparing-for-installation'
    PREPARING_SUCCESSFUL = 'preparing-successful'
    PENDING_FOR_INPUT = 'pending-for-input'
    INSTALLING = 'installing'
    INSTALLING_IN_PROGRESS = 'installing-in-progress'
    INSTALLING_PENDING_USER_ACTION = 'installing-pending-user-action'
    RESETTING_PENDING_USER_ACTION = 'resetting-pending-user-action'
    INSTALLED = 'installed'
    ERROR = 'error'
    RESETTING = 'resetting'
    ADDED_TO_EXISTING_CLUSTER = 'added-to-existing-cluster'
    CANCELLED = 'cancelled'
    BINDING = 'binding'
    UNBINDING = 'unbinding'
    KNOWN_UNBOUND = 'known-unbound'
    DISCONNECTED_UNBOUND = 'disconnected-unbound'
    INSUFFICIENT_UNBOUND = 'insufficient-unbound'
    DISABLED_UNBOUND = 'disabled-unbound'
    DISCOVERING_UNBOUND = 'discovering-unbound'


class DownloadableFile(Choice):
    """Files that can be fetched through the cluster downloads endpoint."""
    BOOTSTRAP_IGN = 'bootstrap.ign'
    MASTER_IGN = 'master.ign'
    METADATA_JSON = 'metadata.json'
    WORKER_IGN = 'worker.ign'
    KUBEADMIN_PASSWORD = 'kubeadmin-password'
    KUBECONFIG = 'kubeconfig'
    KUBECONFIG_NOINGRESS = 'kubeconfig-noingress'
    INSTALL_CONFIG_YAML = 'install-config.yaml'
    DISCOVERY_IGN = 'discovery.ign'
    CUSTOM_MANIFESTS_JSON = 'custom_manifests.json'
    CUSTOM_MANIFESTS_YAML = 'custom_manifests.yaml'


_KIND_NAMES = {
    NetworkType: 'network type',
    ImageType: 'image type',
    ClusterStatus: 'cluster status',
    HostStatus: 'host status',
    DownloadableFile: 'filename',
}


def is_valid(kind: Type[Choice], value: str) -> bool:
    """Return True if ``value`` is exactly one of the values of ``kind``.

    Matching is case-sensitive; no normalization is applied.
    """
    return any(member.value == value for member in kind)


def validate(kind: Type[Choice], value: str) -> str:
    """Return ``value`` unchanged if it belongs to ``kind``.

    Raises:
        ValidationError: naming the kind and the rejected value
    """
    if not is_valid(kind, value):
        name = _KIND_NAMES.get(kind, kind.__name__)
        raise ValidationError(f"invalid {name}: {value}")
    return value


def choices(kind: Type[Choice]) -> str:
    """Comma separated list of legal values, for help texts."""
    return ", ".join(member.value for member in kind)
