import json
import sys

import click
from docker.errors import InvalidArgument

from .argument_types import MountType, collect_mounts
from .colors import BOLD, CYAN, GREEN, RED, YELLOW
from .table import Table
from ..mounts import Propagation
from ..parser import KEY_HANDLERS
from ..utils.humanize import file_size


def describe_options(mount):
    """
    Summarizes everything beyond kind/source/target on one line.
    """
    parts = []
    if mount.bind_options is not None and mount.bind_options.propagation:
        parts.append("propagation={}".format(mount.bind_options.propagation))
    if mount.volume_options is not None:
        volume_options = mount.volume_options
        if volume_options.no_copy:
            parts.append("nocopy")
        for name, value in sorted(volume_options.labels.items()):
            parts.append("label:{}={}".format(name, value))
        if volume_options.driver_config.name:
            parts.append("driver={}".format(volume_options.driver_config.name))
        for name, value in sorted(volume_options.driver_config.options.items()):
            parts.append("opt:{}={}".format(name, value))
    if mount.max_bandwidth:
        parts.append("bandwidth={}/s".format(file_size(mount.max_bandwidth)))
    if mount.max_iops:
        parts.append("iops={}".format(mount.max_iops))
    return " ".join(parts)


@click.command()
@click.option(
    "--mount", "-m", "mounts",
    multiple=True,
    required=True,
    metavar="SPEC",
    callback=collect_mounts,
    help="Mount specification, e.g. type=bind,source=/src,target=/dst. Repeatable.",
)
@click.option("--json", "as_json", default=False, is_flag=True, help="Print the mounts as JSON.")
@click.pass_obj
def parse(app, mounts, as_json):
    """
    Parses --mount specifications and prints the result.
    """
    color = None if app.config["output"]["color"] else False
    mount_config = app.config["mount"]
    if mount_config["check_types"]:
        for mount in mounts:
            if mount.kind not in mount_config["known_types"]:
                click.echo(
                    YELLOW("Unknown mount type '{}' for target {}".format(mount.kind, mount.target)),
                    err=True,
                    color=color,
                )
    if as_json:
        click.echo(json.dumps([mount.as_dict() for mount in mounts], indent=4))
        return
    table = Table([
        ("TYPE", 8),
        ("SOURCE", 30),
        ("TARGET", 30),
        ("MODE", 4),
        ("OPTIONS", 40),
    ], color=color)
    table.print_all(
        (mount.kind, mount.source, mount.target, mount.mode, describe_options(mount))
        for mount in mounts
    )
    click.echo(GREEN(str(mounts)), color=color)


@click.command()
def keys():
    """
    Lists the keys a mount specification understands.
    """
    table = Table([
        ("KEY", 18),
        ("DESCRIPTION", 60),
    ])
    table.print_all((key, description) for key, (_, description) in KEY_HANDLERS.items())
    click.echo("\n{} {}".format(
        BOLD("bind-propagation modes:"),
        ", ".join(sorted(Propagation.known_modes)),
    ))


@click.command()
@click.argument("mount", type=MountType())
def docker(mount):
    """
    Prints the Docker API mount for a single specification.
    """
    try:
        docker_mount = mount.to_docker_mount()
    except InvalidArgument as e:
        click.echo(RED("Docker rejected mount {}: {}".format(CYAN(mount.target), e)), err=True)
        sys.exit(1)
    click.echo(json.dumps(dict(docker_mount), indent=4, sort_keys=True))
