import logging
from pathlib import Path
from typing import Optional

import typer

from oaitool.commands.common import cluster_option, get_state, handle_errors
from oaitool.exceptions import InvalidResponseError, ValidationError
from oaitool.modules.models import ClusterCreateParams, PullSecret
from oaitool.modules.resolve import find_cluster
from oaitool.modules.validators import (
    ClusterStatus,
    DownloadableFile,
    ImageType,
    NetworkType,
    choices,
    validate,
)
from oaitool.modules.wait import WaitPolicy, wait_for_cluster_status
from oaitool.utils.output import print_fields, print_table, write_raw

logger = logging.getLogger(__name__)

app = typer.Typer(help="Commands for interacting with clusters")


@app.command("list")
@handle_errors
def list_clusters(ctx: typer.Context):
    """List available clusters."""
    clusters = get_state(ctx).client.list_clusters()
    print_table(
        ["Name", "Base Domain", "Id", "Status"],
        [(c.name, c.base_dns_domain, c.id, c.status) for c in clusters],
    )


@app.command("show")
@handle_errors
def show_cluster(
    ctx: typer.Context,
    cluster: str = cluster_option(),
    as_json: bool = typer.Option(False, "--json", "-j", help="Show full JSON data"),
):
    """Show details for a single cluster."""
    detail = find_cluster(get_state(ctx).client, cluster)

    if as_json:
        typer.echo(detail.to_json(indent=2))
        return

    print_fields([
        ("Name", detail.name),
        ("BaseDNSDomain", detail.base_dns_domain),
        ("ID", detail.id),
        ("EnabledHostCount", detail.enabled_host_count),
        ("ApiVip", detail.api_vip),
        ("IngressVip", detail.ingress_vip),
        ("OpenshiftVersion", detail.openshift_version),
        ("Status", detail.status),
    ])


@app.command("status")
@handle_errors
def cluster_status(ctx: typer.Context, cluster: str = cluster_option()):
    """Print cluster status."""
    typer.echo(find_cluster(get_state(ctx).client, cluster).status)


@app.command("create")
@handle_errors
def create_cluster(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Cluster name"),
    pull_secret: Optional[Path] = typer.Option(None, help="Read pull secret from a file"),
    openshift_version: str = typer.Option("", help="OpenShift version"),
    base_domain: str = typer.Option("", help="Base DNS domain"),
    ssh_public_key: Optional[Path] = typer.Option(None, help="Public ssh key file"),
    network_type: str = typer.Option(
        NetworkType.OPENSHIFT_SDN.value, help=f"Network type ({choices(NetworkType)})"
    ),
    high_availability_mode: Optional[str] = typer.Option(None, help="Full or None"),
):
    """Create an assisted installer cluster."""
    validate(NetworkType, network_type)
    client = get_state(ctx).client

    if pull_secret is not None:
        logger.debug(f"reading pull secret from {pull_secret}")
        secret = PullSecret.from_file(pull_secret)
    else:
        secret = client.get_pull_secret()

    ssh_key = None
    if ssh_public_key is not None:
        logger.debug(f"reading ssh key from {ssh_public_key}")
        ssh_key = ssh_public_key.expanduser().read_text().strip()

    params = ClusterCreateParams(
        name=name,
        pull_secret=secret.to_json(),
        openshift_version=openshift_version,
        base_dns_domain=base_domain or None,
        ssh_public_key=ssh_key,
        network_type=network_type,
        high_availability_mode=high_availability_mode,
    )

    logger.info(f"creating cluster {name}")
    created = client.create_cluster(params)
    typer.echo(f"{created.name} {created.id}")


@app.command("delete")
@handle_errors
def delete_cluster(ctx: typer.Context, cluster: str = cluster_option()):
    """Delete the specified cluster."""
    client = get_state(ctx).client
    detail = find_cluster(client, cluster)

    logger.info(f"deleting cluster {detail.name}")
    client.delete_cluster(detail.id)
    typer.echo(f"✅ Deleted cluster {detail.name} ({detail.id})")


@app.command("install")
@handle_errors
def install_cluster(ctx: typer.Context, cluster: str = cluster_option()):
    """Start cluster installation."""
    client = get_state(ctx).client
    detail = find_cluster(client, cluster)

    logger.info(f"starting install of cluster {detail.name} ({detail.id})")
    client.install_cluster(detail.id)
    typer.echo(f"🚀 Install of cluster {detail.name} started")


@app.command("cancel")
@handle_errors
def cancel_cluster(ctx: typer.Context, cluster: str = cluster_option()):
    """Cancel a running installation."""
    client = get_state(ctx).client
    detail = find_cluster(client, cluster)

    logger.info(f"cancelling install of cluster {detail.name} ({detail.id})")
    client.cancel_cluster(detail.id)
    typer.echo(f"Install of cluster {detail.name} cancelled")


@app.command("reset")
@handle_errors
def reset_cluster(ctx: typer.Context, cluster: str = cluster_option()):
    """Reset a failed or cancelled installation."""
    client = get_state(ctx).client
    detail = find_cluster(client, cluster)

    logger.info(f"resetting cluster {detail.name} ({detail.id})")
    client.reset_cluster(detail.id)
    typer.echo(f"Cluster {detail.name} reset")


@app.command("set-vips")
@handle_errors
def set_vips(
    ctx: typer.Context,
    cluster: str = cluster_option(),
    api_vip: str = typer.Option(..., help="API VIP"),
    ingress_vip: str = typer.Option(..., help="Ingress VIP"),
):
    """Set the API and ingress virtual IPs of a cluster."""
    client = get_state(ctx).client
    detail = find_cluster(client, cluster)

    if not detail.machine_network_cidr:
        raise ValidationError("cluster does not have a machine network defined")

    detail = client.set_vips(detail.id, api_vip, ingress_vip)
    print_fields([
        ("ApiVip", detail.api_vip),
        ("IngressVip", detail.ingress_vip),
    ])


@app.command("get-image-url")
@handle_errors
def get_image_url(
    ctx: typer.Context,
    cluster: str = cluster_option(),
    image_type: str = typer.Option(
        ImageType.MINIMAL_ISO.value, help=f"Discovery image type ({choices(ImageType)})"
    ),
):
    """Get discovery image download url, generating the image if needed."""
    validate(ImageType, image_type)
    client = get_state(ctx).client
    detail = find_cluster(client, cluster)

    if not detail.image_info.download_url:
        logger.info("generating discovery image")
        detail = client.create_discovery_image(detail.id, image_type)

        if not detail.image_info.download_url:
            raise InvalidResponseError("failed to retrieve discovery image url")

    logger.debug(f"image info: {detail.image_info}")
    typer.echo(detail.image_info.download_url)


@app.command("get-kubeconfig")
@handle_errors
def get_kubeconfig(ctx: typer.Context, cluster: str = cluster_option()):
    """Get cluster kubeconfig."""
    client = get_state(ctx).client
    detail = find_cluster(client, cluster)
    write_raw(client.get_kubeconfig(detail.id))


@app.command("get-file")
@handle_errors
def get_file(
    ctx: typer.Context,
    filename: str = typer.Argument(..., help=f"One of: {choices(DownloadableFile)}"),
    cluster: str = cluster_option(),
):
    """Get a generated file from a cluster."""
    validate(DownloadableFile, filename)
    client = get_state(ctx).client
    detail = find_cluster(client, cluster)
    write_raw(client.get_file(detail.id, filename))


@app.command("wait-for-status")
@handle_errors
def wait_for_status(
    ctx: typer.Context,
    status: str = typer.Argument(..., help=f"One of: {choices(ClusterStatus)}"),
    cluster: str = cluster_option(),
    interval: int = typer.Option(5, help="Number of seconds to sleep between retries"),
    retries: int = typer.Option(0, help="Number of times to check status"),
    timeout: int = typer.Option(0, help="Number of seconds after which we timeout"),
):
    """Wait until cluster reaches the named status."""
    validate(ClusterStatus, status)
    client = get_state(ctx).client
    detail = find_cluster(client, cluster)

    policy = WaitPolicy(interval=interval, retries=retries, timeout=timeout)
    detail = wait_for_cluster_status(client, detail, status, policy)
    typer.echo(f"✅ Cluster {detail.name} reached status {detail.status}")
