import re


SIZE_PATTERN = re.compile(r"([0-9]+)(?:\.([0-9]+))? ?([kmgtp])?i?b?", re.IGNORECASE)

SIZE_MULTIPLIERS = {
    None: 1,
    "k": 1024,
    "m": 1024 ** 2,
    "g": 1024 ** 3,
    "t": 1024 ** 4,
    "p": 1024 ** 5,
}

# Sizes are stored as unsigned 64-bit integers downstream
MAX_SIZE = 2 ** 64 - 1


def file_size(value, fmt="{value:.1f} {suffix}", si=False):
    """
    Takes a raw number of bytes and returns a humanized filesize.
    """
    if si:
        base = 1000
        suffixes = ("B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")
    else:
        base = 1024
        suffixes = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB")
    max_suffix_index = len(suffixes) - 1
    for i, suffix in enumerate(suffixes):
        unit = base ** (i + 1)
        if value < unit or i == max_suffix_index:
            return fmt.format(value=(base * value / unit), suffix=suffix)


def parse_size(value):
    """
    Takes a humanized memory size ("512", "500k", "1mb", "1.5 GiB") and
    returns the number of bytes it stands for. Units are always binary, so
    "1k" is 1024 bytes. Raises ValueError if the string is not a size.
    """
    match = SIZE_PATTERN.fullmatch(value)
    if match is None:
        raise ValueError("invalid size: '{}'".format(value))
    whole, fraction, unit = match.groups()
    if unit is not None:
        unit = unit.lower()
    multiplier = SIZE_MULTIPLIERS[unit]
    size = int(whole) * multiplier
    # Fractions of a byte are dropped
    if fraction:
        size += int(fraction) * multiplier // 10 ** len(fraction)
    if size > MAX_SIZE:
        raise ValueError("size out of range: '{}'".format(value))
    return size
