import pytest

from oaitool.exceptions import ValidationError
from oaitool.modules.validators import (
    ClusterStatus,
    DownloadableFile,
    HostStatus,
    ImageType,
    NetworkType,
    choices,
    is_valid,
    validate,
)


def test_valid_values_are_returned_unchanged():
    assert validate(NetworkType, "OVNKubernetes") == "OVNKubernetes"
    assert validate(ImageType, "full-iso") == "full-iso"
    assert validate(ClusterStatus, "installed") == "installed"
    assert validate(HostStatus, "known-unbound") == "known-unbound"
    assert validate(DownloadableFile, "kubeadmin-password") == "kubeadmin-password"


def test_matching_is_case_sensitive():
    assert not is_valid(NetworkType, "openshiftsdn")
    assert not is_valid(ImageType, "Minimal-ISO")


@pytest.mark.parametrize("kind, value, message", [
    (NetworkType, "Calico", "invalid network type: Calico"),
    (ImageType, "tiny-iso", "invalid image type: tiny-iso"),
    (ClusterStatus, "done", "invalid cluster status: done"),
    (HostStatus, "", "invalid host status: "),
    (DownloadableFile, "passwd", "invalid filename: passwd"),
])
def test_invalid_values_name_the_kind(kind, value, message):
    with pytest.raises(ValidationError) as excinfo:
        validate(kind, value)
    assert str(excinfo.value) == message


def test_enum_members_print_as_values():
    assert str(ClusterStatus.READY) == "ready"
    assert f"{ImageType.MINIMAL_ISO}" == "minimal-iso"


def test_choices_lists_every_value():
    assert choices(NetworkType) == "OpenShiftSDN, OVNKubernetes"
    assert len(list(DownloadableFile)) == 11
