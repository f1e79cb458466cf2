import copy
import csv
import logging
import re
import threading

import attr
import click

from .exceptions import (
    ConflictingOptionsError,
    InvalidValueError,
    MalformedInputError,
    MissingTargetError,
    MissingTypeError,
    MissingValueError,
    MountSpecError,
    UnknownKeyError,
)
from .mounts import MountDescriptor, MountKind, ensure_bind_options, ensure_volume_options
from .utils.humanize import MAX_SIZE, parse_size
from .utils.spell import spell_correct

logger = logging.getLogger(__name__)

BOOLEAN = click.BOOL
UNSIGNED = click.IntRange(min=0, max=MAX_SIZE)
DIGITS = re.compile(r"[0-9]+")


def find_bare_quote(raw):
    """
    Returns the position of the first quote inside an unquoted field, or
    None. The csv module keeps such quotes as literal text.
    """
    state = "start"
    for position, char in enumerate(raw):
        if state == "start":
            if char == '"':
                state = "quoted"
            elif char != ",":
                state = "unquoted"
        elif state == "unquoted":
            if char == '"':
                return position
            if char == ",":
                state = "start"
        elif state == "quoted":
            if char == '"':
                state = "closed"
        else:
            # A doubled quote is an escaped quote
            state = "quoted" if char == '"' else "start"
    return None


def split_fields(raw):
    """
    Reads the raw option value as exactly one CSV record.
    """
    if "\n" in raw or "\r" in raw:
        raise MalformedInputError(raw, "must be a single line")
    # No field can be longer than the whole value
    if len(raw) > csv.field_size_limit():
        csv.field_size_limit(len(raw))
    try:
        records = list(csv.reader([raw], strict=True))
    except csv.Error as e:
        raise MalformedInputError(raw, str(e))
    if not records or not records[0]:
        raise MalformedInputError(raw, "no fields given")
    position = find_bare_quote(raw)
    if position is not None:
        raise MalformedInputError(raw, 'bare " in non-quoted field at column {}'.format(position + 1))
    return records[0]


def split_pair(value):
    """
    Splits "key=value" on the first "="; a bare "key" has an empty value.
    """
    key, _, value = value.partition("=")
    return key, value


def _parse_bool(key, value, field):
    try:
        return BOOLEAN.convert(value, None, None)
    except click.BadParameter:
        raise InvalidValueError(key, value, field)


def _set_type(mount, key, value, field):
    mount.kind = value.lower()


def _set_source(mount, key, value, field):
    mount.source = value


def _set_target(mount, key, value, field):
    mount.target = value


def _set_read_only(mount, key, value, field):
    mount.read_only = _parse_bool(key, value, field)


def _set_max_bandwidth(mount, key, value, field):
    try:
        mount.max_bandwidth = parse_size(value)
    except ValueError:
        raise InvalidValueError(key, value, field)


def _set_max_iops(mount, key, value, field):
    if not DIGITS.fullmatch(value):
        raise InvalidValueError(key, value, field)
    try:
        mount.max_iops = UNSIGNED.convert(value, None, None)
    except click.BadParameter:
        raise InvalidValueError(key, value, field)


def _set_bind_propagation(mount, key, value, field):
    ensure_bind_options(mount).propagation = value.lower()


def _set_volume_nocopy(mount, key, value, field):
    ensure_volume_options(mount).no_copy = _parse_bool(key, value, field)


def _set_volume_label(mount, key, value, field):
    label, label_value = split_pair(value)
    ensure_volume_options(mount).labels[label] = label_value


def _set_volume_driver(mount, key, value, field):
    ensure_volume_options(mount).driver_config.name = value


def _set_volume_opt(mount, key, value, field):
    option, option_value = split_pair(value)
    ensure_volume_options(mount).driver_config.options[option] = option_value


# Every recognized key, in the order they are documented.
KEY_HANDLERS = {
    "type": (_set_type, "mount type: volume, bind, tmpfs, npipe or cluster"),
    "source": (_set_source, "volume name or host path"),
    "src": (_set_source, "alias of source"),
    "target": (_set_target, "path inside the container"),
    "dst": (_set_target, "alias of target"),
    "destination": (_set_target, "alias of target"),
    "readonly": (_set_read_only, "mount read-only (flag or boolean)"),
    "ro": (_set_read_only, "alias of readonly"),
    "max-bandwidth": (_set_max_bandwidth, "bandwidth limit as a byte size, e.g. 1mb"),
    "max-iops": (_set_max_iops, "IO operations per second limit"),
    "bind-propagation": (_set_bind_propagation, "bind propagation mode"),
    "volume-nocopy": (_set_volume_nocopy, "do not populate the volume (flag or boolean)"),
    "volume-label": (_set_volume_label, "volume label as key[=value], repeatable"),
    "volume-driver": (_set_volume_driver, "volume driver name"),
    "volume-opt": (_set_volume_opt, "volume driver option as key[=value], repeatable"),
}

# Keys that may be given without "=value", and the value they imply.
FLAG_KEYS = {
    "readonly": "true",
    "ro": "true",
    "volume-nocopy": "true",
}


def parse(raw):
    """
    Parses one mount specification such as
    "type=bind,source=/src,target=/dst,readonly" into a MountDescriptor.

    Fields are applied in order, so later single-valued keys win. Raises a
    MountSpecError subclass describing the first problem found; nothing is
    returned for a partially parsed specification.
    """
    mount = MountDescriptor()
    for field in split_fields(raw):
        key, has_value, value = field.partition("=")
        key = key.lower()
        if not has_value:
            if key in FLAG_KEYS:
                value = FLAG_KEYS[key]
            elif key in KEY_HANDLERS:
                raise MissingValueError(key, field)
        if key not in KEY_HANDLERS:
            raise UnknownKeyError(key, field, spell_correct(key, list(KEY_HANDLERS)))
        handler, _ = KEY_HANDLERS[key]
        handler(mount, key, value, field)

    if mount.kind is None:
        mount.kind = MountKind.VOLUME
    if not mount.kind:
        raise MissingTypeError(raw)
    if not mount.target:
        raise MissingTargetError(raw)
    if mount.kind == MountKind.BIND and mount.volume_options is not None:
        raise ConflictingOptionsError(MountKind.BIND, "volume", raw)
    if mount.kind == MountKind.VOLUME and mount.bind_options is not None:
        raise ConflictingOptionsError(MountKind.VOLUME, "bind", raw)
    return mount


@attr.s(eq=False)
class MountOpt:
    """
    Collects the mounts from a repeatable --mount option, in the order they
    were given. Safe to fill from several threads.
    """
    type_name = "mount"

    _values = attr.ib(default=attr.Factory(list), init=False)
    _lock = attr.ib(default=attr.Factory(threading.Lock), init=False, repr=False)

    def accumulate(self, raw):
        """
        Parses `raw` and appends the result. On error nothing is appended.
        """
        try:
            mount = parse(raw)
        except MountSpecError as e:
            logger.debug("Rejected mount %r: %s", raw, e)
            raise
        with self._lock:
            self._values.append(mount)
        logger.debug("Added mount %s", mount)
        return copy.deepcopy(mount)

    set = accumulate

    def values(self):
        """
        Returns copies of the accumulated mounts; the stored ones never change.
        """
        with self._lock:
            return copy.deepcopy(self._values)

    def render(self):
        return ", ".join(
            "{} {} {}".format(mount.kind, mount.source, mount.target)
            for mount in self.values()
        )

    def __str__(self):
        return self.render()

    def __len__(self):
        with self._lock:
            return len(self._values)

    def __iter__(self):
        return iter(self.values())
