import attr
import docker.types


class MountKind:
    BIND = "bind"
    VOLUME = "volume"
    TMPFS = "tmpfs"
    NPIPE = "npipe"
    CLUSTER = "cluster"

    known_kinds = frozenset([
        BIND,
        VOLUME,
        TMPFS,
        NPIPE,
        CLUSTER,
    ])


class Propagation:
    PRIVATE = "private"
    RPRIVATE = "rprivate"
    SHARED = "shared"
    RSHARED = "rshared"
    SLAVE = "slave"
    RSLAVE = "rslave"

    known_modes = frozenset([
        PRIVATE,
        RPRIVATE,
        SHARED,
        RSHARED,
        SLAVE,
        RSLAVE,
    ])


@attr.s
class DriverConfig:
    name = attr.ib(default="")
    options = attr.ib(default=attr.Factory(dict))


@attr.s
class VolumeOptions:
    no_copy = attr.ib(default=False)
    labels = attr.ib(default=attr.Factory(dict))
    driver_config = attr.ib(default=attr.Factory(DriverConfig))


@attr.s
class BindOptions:
    propagation = attr.ib(default="")


@attr.s
class MountDescriptor:
    """
    Describes how a single source is attached into a container. Built up
    field by field by the parser and validated once it is complete.
    """
    kind = attr.ib(default=None)
    source = attr.ib(default="")
    target = attr.ib(default="")
    read_only = attr.ib(default=False)
    max_bandwidth = attr.ib(default=0)
    max_iops = attr.ib(default=0)
    volume_options = attr.ib(default=None)
    bind_options = attr.ib(default=None)

    @property
    def mode(self):
        return "ro" if self.read_only else "rw"

    def as_dict(self):
        return attr.asdict(self)

    def to_docker_mount(self):
        """
        Returns the docker-py Mount for this descriptor. docker-py validates
        the kind and rejects options that do not belong to it.
        """
        kwargs = {}
        if self.bind_options is not None:
            kwargs["propagation"] = self.bind_options.propagation or None
        if self.volume_options is not None:
            kwargs["no_copy"] = self.volume_options.no_copy
            kwargs["labels"] = self.volume_options.labels or None
            driver = self.volume_options.driver_config
            if driver.name or driver.options:
                kwargs["driver_config"] = docker.types.DriverConfig(
                    driver.name,
                    options=driver.options or None,
                )
        return docker.types.Mount(
            target=self.target,
            source=self.source or None,
            type=self.kind,
            read_only=self.read_only,
            **kwargs
        )


def ensure_volume_options(descriptor):
    """
    Returns the descriptor's volume options, creating them on first use.
    """
    if descriptor.volume_options is None:
        descriptor.volume_options = VolumeOptions()
    return descriptor.volume_options


def ensure_bind_options(descriptor):
    """
    Returns the descriptor's bind options, creating them on first use.
    """
    if descriptor.bind_options is None:
        descriptor.bind_options = BindOptions()
    return descriptor.bind_options
