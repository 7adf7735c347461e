import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from oaitool.exceptions import InventoryError, ValidationError
from oaitool.modules.models import Cluster, ClusterCreateParams, Host, PullSecret


def test_host_inventory_is_parsed(fakes):
    host = Host.model_validate(fakes.host("h-1", inventory=fakes.inventory(mac="aa:bb:cc:dd:ee:ff")))
    inventory = host.get_inventory()

    assert inventory.bmc_address == "10.0.0.1"
    assert inventory.system_vendor.manufacturer == "Dell Inc."
    assert inventory.mac_addresses() == ["aa:bb:cc:dd:ee:ff"]
    assert [d.name for d in inventory.disks if d.bootable] == ["sda"]


def test_empty_inventory_raises():
    host = Host(id="h-1", status="discovering")
    with pytest.raises(InventoryError):
        host.get_inventory()


def test_garbage_inventory_raises(fakes):
    host = Host.model_validate(fakes.host("h-1", inventory="{not json"))
    with pytest.raises(InventoryError):
        host.get_inventory()


def test_unknown_fields_are_kept_for_json_output(fakes):
    cluster = Cluster.model_validate(fakes.cluster("c-1", "alpha", feature_flags={"x": 1}))
    assert json.loads(cluster.to_json())["feature_flags"] == {"x": 1}


def test_cluster_status_must_be_known(fakes):
    with pytest.raises(PydanticValidationError):
        Cluster.model_validate(fakes.cluster("c-1", "alpha", status="bogus"))


def test_empty_network_type_is_none(fakes):
    cluster = Cluster.model_validate(fakes.cluster("c-1", "alpha", network_type=""))
    assert cluster.network_type is None


def test_pull_secret_from_file(tmp_path):
    path = tmp_path / "pull-secret.json"
    path.write_text(json.dumps({"auths": {"quay.io": {"auth": "dXNlcjpwYXNz", "email": "me@example.com"}}}))

    secret = PullSecret.from_file(path)
    assert secret.auths["quay.io"].auth == "dXNlcjpwYXNz"
    assert json.loads(secret.to_json())["auths"]["quay.io"]["email"] == "me@example.com"


def test_invalid_pull_secret_file(tmp_path):
    path = tmp_path / "pull-secret.json"
    path.write_text("not json")
    with pytest.raises(ValidationError):
        PullSecret.from_file(path)


def test_create_params_require_name_version_and_secret():
    params = ClusterCreateParams(name="alpha", openshift_version="", pull_secret="{}")
    with pytest.raises(ValidationError) as excinfo:
        params.check()
    assert "openshift_version" in str(excinfo.value)


def test_create_params_reject_unknown_network_type():
    params = ClusterCreateParams(name="a", openshift_version="4.8", pull_secret="{}", network_type="Calico")
    with pytest.raises(ValidationError):
        params.check()


def test_create_params_json_omits_unset_fields():
    params = ClusterCreateParams(name="a", openshift_version="4.8", pull_secret="{}")
    assert json.loads(params.to_json()) == {"name": "a", "openshift_version": "4.8", "pull_secret": "{}"}


def test_null_cluster_fields_take_defaults(fakes):
    data = fakes.cluster("c-1", "alpha", api_vip=None, enabled_host_count=None, image_info=None)
    data["hosts"] = None
    cluster = Cluster.model_validate(data)
    assert cluster.api_vip == ""
    assert cluster.enabled_host_count == 0
    assert cluster.hosts == []
    assert cluster.image_info.download_url == ""


def test_null_inventory_fields_take_defaults(fakes):
    inventory = json.loads(fakes.inventory())
    inventory["bmc_v6address"] = None
    inventory["interfaces"][0]["ipv6_addresses"] = None
    inventory["system_vendor"]["serial_number"] = None
    host = Host.model_validate(fakes.host("h-1", inventory=json.dumps(inventory)))

    parsed = host.get_inventory()
    assert parsed.bmc_v6address == ""
    assert parsed.interfaces[0].ipv6_addresses == []
    assert parsed.system_vendor.serial_number == ""
    assert parsed.system_vendor.manufacturer == "Dell Inc."


def test_null_required_field_still_fails(fakes):
    with pytest.raises(PydanticValidationError):
        Cluster.model_validate(fakes.cluster("c-1", "alpha", status=None))
