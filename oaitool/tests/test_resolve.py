import pytest

from oaitool.exceptions import NotFoundError
from oaitool.modules.resolve import find_cluster, find_host, resolve


def test_cluster_found_by_id(fake_client):
    assert find_cluster(fake_client, "c-2").name == "beta"
    assert ("list_clusters",) not in fake_client.calls


def test_cluster_found_by_name(fake_client):
    cluster = find_cluster(fake_client, "alpha")
    assert cluster.id == "c-1"
    # id lookup failed, then the listing, then a fetch by the real id
    assert fake_client.calls == [("get_cluster", "alpha"), ("list_clusters",), ("get_cluster", "c-1")]


def test_unknown_cluster(fake_client):
    with pytest.raises(NotFoundError) as excinfo:
        find_cluster(fake_client, "gamma")
    assert str(excinfo.value) == "no cluster matching gamma"


def test_first_name_match_wins():
    items = {"1": ("1", "dup"), "2": ("2", "dup")}

    def lookup(item_id):
        if item_id not in items:
            raise KeyError(item_id)
        return items[item_id]

    found = resolve("dup", lookup, lambda: list(items.values()), lambda i: i[1], lambda i: i[0])
    assert found == ("1", "dup")


def test_host_found_by_hostname(fake_client):
    host = find_host(fake_client, "c-1", "node-2")
    assert host.id == "h-2"


def test_host_found_by_id(fake_client):
    assert find_host(fake_client, "c-1", "h-3").status == "discovering"


def test_unknown_host(fake_client):
    with pytest.raises(NotFoundError):
        find_host(fake_client, "c-1", "node-9")


def test_name_and_id_resolve_to_same_cluster(fake_client):
    assert find_cluster(fake_client, "beta") == find_cluster(fake_client, "c-2")
