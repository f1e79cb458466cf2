import logging
import os
import yaml

from .exceptions import BadConfigError

logger = logging.getLogger(__name__)


class Config(object):
    """
    Main config manager. Dumb key-value store that loads config files on top
    of a set of defaults and presents a combined view of them.

    A schema is used to inform how to merge/override values.
    """

    schema = {
        "mount": {
            "known_types": list,
            "check_types": bool,
        },
        "output": {
            "color": bool,
        },
    }

    defaults = {
        "mount": {
            "known_types": ["bind", "volume", "tmpfs", "npipe", "cluster"],
            "check_types": True,
        },
        "output": {
            "color": True,
        },
    }

    default_path = os.path.expanduser("~/.mountopt/config.yaml")

    def __init__(self, file_paths):
        self.file_paths = file_paths
        self.load()

    @classmethod
    def from_path(cls, path=None):
        """
        Loads the given file, or the user's config file if it exists.
        """
        if path is not None:
            return cls([path])
        if os.path.isfile(cls.default_path):
            return cls([cls.default_path])
        return cls([])

    def load(self):
        """
        Loads data from the files.
        """
        self.data = {}
        self.add_config(self.defaults, "<defaults>")
        for file_path in self.file_paths:
            # Load YAML into memory
            with open(file_path, "r") as fh:
                file_data = yaml.safe_load(fh.read())
            # An empty file is an empty config
            if file_data is None:
                continue
            self.add_config(file_data, file_path)
            logger.debug("Loaded config from %s", file_path)

    def add_config(self, data, filename):
        """
        Adds the given config on top of the existing ones. Used during load
        and directly for CLI options.
        """
        # Check top level type
        if not isinstance(data, dict):
            raise BadConfigError("Config %s is not a dict at the top level." % filename)
        # Iterate through sections, check type
        for section, items in data.items():
            if not isinstance(items, dict):
                raise BadConfigError("Section %s in %s is not a dict" % (section, filename))
            if section not in self.schema:
                raise BadConfigError("Section %s in %s not in schema" % (section, filename))
            # Iterate through keys, check type
            for key, value in items.items():
                if key not in self.schema[section]:
                    raise BadConfigError("%s.%s in %s not in schema" % (section, key, filename))
                valid_type = self.schema[section][key]
                if not isinstance(value, valid_type):
                    raise BadConfigError("%s.%s in %s is not %s" % (section, key, filename, valid_type.__name__))
                # Save value
                self.data.setdefault(section, {})[key] = value

    def __getitem__(self, key):
        return self.data[key]
