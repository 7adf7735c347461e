import json
import uuid
from types import SimpleNamespace

import pytest

from oaitool.exceptions import APIError
from oaitool.modules.models import Cluster, Host, ImageInfo, PullSecret


def make_inventory(mac="52:54:00:00:00:01", bmc="10.0.0.1", vendor="Dell Inc.", product="PowerEdge R640"):
    return json.dumps({
        "bmc_address": bmc,
        "cpu": {"architecture": "x86_64", "count": 8, "model_name": "Xeon"},
        "memory": {"physical_bytes": 34359738368},
        "disks": [
            {"name": "sda", "path": "/dev/sda", "drive_type": "SSD", "size_bytes": 480000000000, "bootable": True},
            {"name": "sdb", "path": "/dev/sdb", "drive_type": "HDD", "size_bytes": 2000000000000},
        ],
        "interfaces": [
            {"name": "eno1", "mac_address": mac, "ipv4_addresses": ["192.168.1.10/24"], "speed_mbps": 10000},
        ],
        "system_vendor": {"manufacturer": vendor, "product_name": product, "serial_number": "ABC123"},
    })


def make_host(host_id, hostname="", status="known", inventory=None, role="master"):
    return {
        "id": host_id,
        "requested_hostname": hostname,
        "status": status,
        "role": role,
        "inventory": make_inventory() if inventory is None else inventory,
    }


def make_cluster(cluster_id, name, status="ready", hosts=(), **extra):
    data = {
        "id": cluster_id,
        "name": name,
        "base_dns_domain": "example.com",
        "openshift_version": "4.8",
        "status": status,
        "hosts": list(hosts),
    }
    data.update(extra)
    return data


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None, content=None, reason=""):
        self.status_code = status_code
        self._payload = payload
        self.reason = reason
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text
        self.content = content if content is not None else text.encode()

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class FakeSession:
    """Records requests and answers them from a queue of responses."""

    def __init__(self, *responses):
        self.headers = {}
        self.responses = list(responses)
        self.calls = []

    def _next(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        return self.responses.pop(0)

    def request(self, method, url, **kwargs):
        return self._next(method, url, **kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)


class FakeClient:
    """In-memory stand-in for AssistedClient used by command tests."""

    def __init__(self, clusters=()):
        self.clusters = {c["id"]: dict(c) for c in clusters}
        self.calls = []

    def _cluster(self, cluster_id):
        if cluster_id not in self.clusters:
            raise APIError(f"get cluster {cluster_id}", 404, "Not Found", "no such cluster")
        return self.clusters[cluster_id]

    def list_clusters(self):
        self.calls.append(("list_clusters",))
        return [Cluster.model_validate(c) for c in self.clusters.values()]

    def get_cluster(self, cluster_id):
        self.calls.append(("get_cluster", cluster_id))
        return Cluster.model_validate(self._cluster(cluster_id))

    def create_cluster(self, params):
        params.check()
        self.calls.append(("create_cluster", params.name))
        cluster_id = str(uuid.uuid4())
        self.clusters[cluster_id] = make_cluster(
            cluster_id, params.name, status="insufficient",
            openshift_version=params.openshift_version,
            base_dns_domain=params.base_dns_domain or "",
        )
        return Cluster.model_validate(self.clusters[cluster_id])

    def set_vips(self, cluster_id, api_vip, ingress_vip):
        self.calls.append(("set_vips", cluster_id, api_vip, ingress_vip))
        cluster = self._cluster(cluster_id)
        cluster.update(api_vip=api_vip, ingress_vip=ingress_vip, vip_dhcp_allocation=False)
        return Cluster.model_validate(cluster)

    def set_hostnames(self, cluster_id, hostnames):
        self.calls.append(("set_hostnames", cluster_id, [(h.id, h.hostname) for h in hostnames]))
        cluster = self._cluster(cluster_id)
        names = {h.id: h.hostname for h in hostnames}
        for host in cluster["hosts"]:
            if host["id"] in names:
                host["requested_hostname"] = names[host["id"]]
        return Cluster.model_validate(cluster)

    def install_cluster(self, cluster_id):
        self.calls.append(("install_cluster", cluster_id))
        self._cluster(cluster_id)["status"] = "preparing-for-installation"

    def cancel_cluster(self, cluster_id):
        self.calls.append(("cancel_cluster", cluster_id))
        self._cluster(cluster_id)["status"] = "cancelled"

    def reset_cluster(self, cluster_id):
        self.calls.append(("reset_cluster", cluster_id))
        self._cluster(cluster_id)["status"] = "insufficient"

    def delete_cluster(self, cluster_id):
        self.calls.append(("delete_cluster", cluster_id))
        del self.clusters[cluster_id]

    def get_host(self, cluster_id, host_id):
        self.calls.append(("get_host", cluster_id, host_id))
        for host in self._cluster(cluster_id)["hosts"]:
            if host["id"] == host_id:
                return Host.model_validate(host)
        raise APIError(f"get host {host_id}", 404, "Not Found", "no such host")

    def delete_host(self, cluster_id, host_id):
        self.calls.append(("delete_host", cluster_id, host_id))
        cluster = self._cluster(cluster_id)
        cluster["hosts"] = [h for h in cluster["hosts"] if h["id"] != host_id]

    def get_pull_secret(self):
        self.calls.append(("get_pull_secret",))
        return PullSecret.model_validate({"auths": {"quay.io": {"auth": "c2VjcmV0", "email": "a@example.com"}}})

    def create_discovery_image(self, cluster_id, image_type, ssh_public_key=""):
        self.calls.append(("create_discovery_image", cluster_id, image_type))
        cluster = self._cluster(cluster_id)
        cluster["image_info"] = ImageInfo(
            download_url=f"https://images.example.com/{cluster_id}.iso", type=image_type
        ).model_dump()
        return Cluster.model_validate(cluster)

    def get_file(self, cluster_id, filename):
        self.calls.append(("get_file", cluster_id, filename))
        return f"contents of {filename}".encode()

    def get_kubeconfig(self, cluster_id):
        self.calls.append(("get_kubeconfig", cluster_id))
        return b"apiVersion: v1\nkind: Config\n"


class FakeClock:
    """Clock whose time only moves when sleep is called."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_client():
    return FakeClient([
        make_cluster("c-1", "alpha", machine_network_cidr="192.168.1.0/24", hosts=[
            make_host("h-1", "node-1"),
            make_host("h-2", "node-2", inventory=make_inventory(mac="52:54:00:00:00:02", bmc="10.0.0.2")),
            make_host("h-3", "", status="discovering", inventory=""),
        ]),
        make_cluster("c-2", "beta", status="installed"),
    ])


@pytest.fixture
def fakes():
    """Factories for payloads and fake transport objects."""
    return SimpleNamespace(
        Response=FakeResponse,
        Session=FakeSession,
        Client=FakeClient,
        cluster=make_cluster,
        host=make_host,
        inventory=make_inventory,
    )
