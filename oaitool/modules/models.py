"""
Data models for Assisted Installer API resources.
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import InventoryError, ValidationError
from .validators import ClusterStatus, HostStatus, ImageType, NetworkType, validate


class Resource(BaseModel):
    """Base for objects served by the API; unknown fields are kept for JSON output."""
    model_config = ConfigDict(extra='allow', use_enum_values=True)

    @model_validator(mode="before")
    @classmethod
    def _null_means_default(cls, data: Any) -> Any:
        # The API sends null for unset fields; those take the field default
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if not (v is None and k in cls.model_fields)}
        return data

    def to_json(self, indent: Optional[int] = None) -> str:
        return self.model_dump_json(indent=indent)


class Progress(Resource):
    current_stage: str = ''
    stage_started_at: Optional[datetime] = None
    stage_updated_at: Optional[datetime] = None


class ImageInfo(Resource):
    ssh_public_key: str = ''
    size_bytes: int = 0
    download_url: str = ''
    generator_version: str = ''
    created_at: Optional[str] = None
    expires_at: Optional[str] = None
    static_network_config: str = ''
    type: str = ''


class CPU(Resource):
    architecture: str = ''
    count: int = 0
    flags: List[str] = Field(default_factory=list)
    frequency: float = 0.0
    model_name: str = ''


class Memory(Resource):
    physical_bytes: int = 0
    usable_bytes: int = 0


class Disk(Resource):
    id: str = ''
    name: str = ''
    path: str = ''
    by_path: str = ''
    drive_type: str = ''
    model: str = ''
    serial: str = ''
    vendor: str = ''
    size_bytes: int = 0
    bootable: bool = False
    is_installation_media: bool = False


class Interface(Resource):
    name: str = ''
    biosdevname: str = ''
    mac_address: str = ''
    mtu: int = 0
    speed_mbps: int = 0
    has_carrier: bool = False
    ipv4_addresses: List[str] = Field(default_factory=list)
    ipv6_addresses: List[Any] = Field(default_factory=list)
    product: str = ''
    vendor: str = ''


class SystemVendor(Resource):
    manufacturer: str = ''
    product_name: str = ''
    serial_number: str = ''


class HostInventory(Resource):
    """Hardware facts reported by the discovery agent running on a host."""
    bmc_address: str = ''
    bmc_v6address: str = ''
    hostname: str = ''
    cpu: CPU = Field(default_factory=CPU)
    memory: Memory = Field(default_factory=Memory)
    disks: List[Disk] = Field(default_factory=list)
    interfaces: List[Interface] = Field(default_factory=list)
    system_vendor: SystemVendor = Field(default_factory=SystemVendor)
    timestamp: int = 0

    def mac_addresses(self) -> List[str]:
        return [iface.mac_address for iface in self.interfaces]


class Host(Resource):
    id: str
    cluster_id: str = ''
    role: str = ''
    status: HostStatus
    status_info: str = ''
    requested_hostname: str = ''
    inventory: str = ''
    progress: Progress = Field(default_factory=Progress)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def get_inventory(self) -> HostInventory:
        """Parse the raw inventory string.

        The payload is parsed again on every call.

        Raises:
            InventoryError: if the inventory is empty or not valid JSON
        """
        if not self.inventory:
            raise InventoryError(f"host {self.id} has no inventory")
        try:
            return HostInventory.model_validate_json(self.inventory)
        except PydanticValidationError as e:
            raise InventoryError(f"failed to parse inventory for host {self.id}: {e}") from e


class Cluster(Resource):
    id: str
    name: str = ''
    kind: str = ''
    href: str = ''
    base_dns_domain: str = ''
    openshift_version: str = ''
    ocp_release_image: str = ''
    api_vip: str = ''
    ingress_vip: str = ''
    machine_network_cidr: str = ''
    cluster_network_cidr: str = ''
    cluster_network_host_prefix: int = 0
    service_network_cidr: str = ''
    vip_dhcp_allocation: bool = False
    user_managed_networking: bool = False
    network_type: Optional[NetworkType] = None
    high_availability_mode: str = ''
    status: ClusterStatus
    status_info: str = ''
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    install_started_at: Optional[datetime] = None
    install_completed_at: Optional[datetime] = None
    hosts: List[Host] = Field(default_factory=list)
    image_info: ImageInfo = Field(default_factory=ImageInfo)
    pull_secret_set: bool = False
    enabled_host_count: int = 0
    total_host_count: int = 0
    ssh_public_key: str = ''

    @field_validator('network_type', mode='before')
    @classmethod
    def _empty_network_type(cls, value):
        return value or None


class PullSecretCredential(BaseModel):
    auth: str
    email: str = ''


class PullSecret(BaseModel):
    """Registry credentials keyed by registry hostname."""
    auths: Dict[str, PullSecretCredential] = Field(default_factory=dict)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'PullSecret':
        with open(Path(path).expanduser()) as f:
            try:
                return cls.model_validate(json.load(f))
            except (json.JSONDecodeError, PydanticValidationError) as e:
                raise ValidationError(f"invalid pull secret in {path}: {e}") from e

    def to_json(self) -> str:
        return self.model_dump_json()


class ClusterCreateParams(BaseModel):
    """Parameters accepted by the cluster create endpoint."""
    model_config = ConfigDict(use_enum_values=True)

    # Required
    name: str
    openshift_version: str
    pull_secret: str

    # Optional
    high_availability_mode: Optional[str] = None
    ocp_release_image: Optional[str] = None
    base_dns_domain: Optional[str] = None
    cluster_network_cidr: Optional[str] = None
    cluster_network_host_prefix: Optional[int] = None
    service_network_cidr: Optional[str] = None
    ingress_vip: Optional[str] = None
    ssh_public_key: Optional[str] = None
    vip_dhcp_allocation: Optional[bool] = None
    http_proxy: Optional[str] = None
    https_proxy: Optional[str] = None
    no_proxy: Optional[str] = None
    user_managed_networking: Optional[bool] = None
    additional_ntp_source: Optional[str] = None
    hyperthreading: Optional[str] = None
    network_type: Optional[str] = None
    schedulable_masters: Optional[bool] = None

    def check(self) -> None:
        """Reject parameters the server would refuse.

        Raises:
            ValidationError: on a missing required field or unknown network type
        """
        missing = [k for k in ('name', 'openshift_version', 'pull_secret') if not getattr(self, k)]
        if missing:
            raise ValidationError(f"missing required cluster parameters: {', '.join(missing)}")
        if self.network_type:
            validate(NetworkType, self.network_type)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


class ClusterNetworkPatch(BaseModel):
    api_vip: str
    ingress_vip: str
    vip_dhcp_allocation: bool = False

    def to_json(self) -> str:
        return self.model_dump_json()


class HostName(BaseModel):
    id: str
    hostname: str


class HostNameList(BaseModel):
    hosts_names: List[HostName]

    def to_json(self) -> str:
        return self.model_dump_json()


class ImageCreateParams(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    image_type: ImageType
    ssh_public_key: str = ''

    def to_json(self) -> str:
        return self.model_dump_json()
