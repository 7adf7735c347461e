import logging
from typing import List, Optional

import typer

from oaitool.commands.common import cluster_option, get_state, handle_errors
from oaitool.exceptions import InventoryError, ValidationError
from oaitool.modules.hostfilter import check_specs, filter_hosts, parse_match
from oaitool.modules.models import Host, HostName
from oaitool.modules.resolve import find_cluster, find_host
from oaitool.modules.validators import HostStatus, choices, validate
from oaitool.modules.wait import WaitPolicy, wait_for_host_status
from oaitool.utils.output import make_table, print_fields, print_table

logger = logging.getLogger(__name__)

app = typer.Typer(help="Commands for interacting with hosts")

HOST_COLUMNS = ["Id", "Hostname", "Role", "BMC Address", "Status"]


def _bmc_address(host: Host) -> str:
    try:
        return host.get_inventory().bmc_address
    except InventoryError as e:
        logger.debug(str(e))
        return ""


def _host_rows(hosts: List[Host]):
    return [
        (h.id, h.requested_hostname, h.role, _bmc_address(h), h.status)
        for h in hosts
    ]


@app.command("list")
@handle_errors
def list_hosts(ctx: typer.Context, cluster: str = cluster_option()):
    """List hosts in a cluster."""
    detail = find_cluster(get_state(ctx).client, cluster)
    print_table(HOST_COLUMNS, _host_rows(detail.hosts))


@app.command("show")
@handle_errors
def show_host(
    ctx: typer.Context,
    host: str = typer.Argument(..., help="Host id or hostname"),
    cluster: str = cluster_option(),
):
    """Show hardware details for a single host."""
    client = get_state(ctx).client
    detail = find_cluster(client, cluster)
    found = find_host(client, detail.id, host)
    inventory = found.get_inventory()

    print_fields([
        ("ID", found.id),
        ("Hostname", found.requested_hostname),
        ("Vendor", inventory.system_vendor.manufacturer),
        ("Model", inventory.system_vendor.product_name),
        ("Serial", inventory.system_vendor.serial_number),
        ("Role", found.role),
        ("Status", found.status),
        ("Stage", found.progress.current_stage),
        ("BMC Address", inventory.bmc_address),
        ("Architecture", inventory.cpu.architecture),
        ("CPU", inventory.cpu.model_name),
        ("Memory (GiB)", f"{inventory.memory.physical_bytes / 2**30:.1f}"),
    ])

    typer.echo("\nInterfaces:")
    interfaces = make_table(["Name", "MAC Address", "IPv4 Addresses", "Speed (Mbps)"])
    for iface in inventory.interfaces:
        interfaces.add_row([
            iface.name, iface.mac_address, ", ".join(iface.ipv4_addresses), iface.speed_mbps
        ])
    typer.echo(interfaces.get_string())

    typer.echo("\nBootable disks:")
    disks = make_table(["Name", "Path", "Type", "Size (GB)"])
    for disk in inventory.disks:
        if disk.bootable:
            disks.add_row([disk.name, disk.by_path or disk.path, disk.drive_type, disk.size_bytes // 10**9])
    typer.echo(disks.get_string())


@app.command("set-name")
@handle_errors
def set_name(
    ctx: typer.Context,
    pairs: List[str] = typer.Argument(None, help="HOST NAME [HOST NAME ...]"),
    cluster: str = cluster_option(),
):
    """Set the requested hostname of one or more hosts."""
    if not pairs:
        raise ValidationError("no hostnames provided")
    if len(pairs) % 2:
        raise ValidationError("wrong number of arguments")

    client = get_state(ctx).client
    detail = find_cluster(client, cluster)

    hostnames = []
    for identifier, name in zip(pairs[::2], pairs[1::2]):
        found = find_host(client, detail.id, identifier)
        logger.info(f"setting name of host {found.id} to {name}")
        hostnames.append(HostName(id=found.id, hostname=name))

    detail = client.set_hostnames(detail.id, hostnames)
    typer.echo(f"✅ Updated {len(hostnames)} hostname(s) in cluster {detail.name}")


@app.command("delete")
@handle_errors
def delete_hosts(
    ctx: typer.Context,
    hosts: List[str] = typer.Argument(..., help="Host ids or hostnames"),
    cluster: str = cluster_option(),
):
    """Delete one or more hosts from a cluster."""
    client = get_state(ctx).client
    detail = find_cluster(client, cluster)

    for identifier in hosts:
        found = find_host(client, detail.id, identifier)
        logger.info(f"deleting host {found.id}")
        client.delete_host(detail.id, found.id)
        typer.echo(f"Deleted host {found.id}")


@app.command("find")
@handle_errors
def find_hosts(
    ctx: typer.Context,
    cluster: str = cluster_option(),
    match: Optional[List[str]] = typer.Option(
        None, "--match", "-m", help="key=value; keys are mac, bmc_address, vendor, product"
    ),
):
    """List hosts whose inventory matches every given criterion; no criteria lists them all."""
    specs = [parse_match(m) for m in match or []]
    check_specs(specs)

    detail = find_cluster(get_state(ctx).client, cluster)
    print_table(HOST_COLUMNS, _host_rows(filter_hosts(detail.hosts, specs)))


@app.command("wait-for-status")
@handle_errors
def wait_for_status(
    ctx: typer.Context,
    status: str = typer.Argument(..., help=f"One of: {choices(HostStatus)}"),
    cluster: str = cluster_option(),
    hosts: int = typer.Option(0, help="Number of hosts to wait for; 0 means all of them"),
    interval: int = typer.Option(5, help="Number of seconds to sleep between retries"),
    retries: int = typer.Option(0, help="Number of times to check status"),
    timeout: int = typer.Option(0, help="Number of seconds after which we timeout"),
):
    """Wait until hosts in the cluster reach the named status."""
    validate(HostStatus, status)
    client = get_state(ctx).client
    detail = find_cluster(client, cluster)

    policy = WaitPolicy(interval=interval, retries=retries, timeout=timeout)
    wait_for_host_status(client, detail, status, policy, count=hosts)
    typer.echo(f"✅ Hosts in cluster {detail.name} reached status {status}")
