"""Module in charge of loading slidefit configuration files.

A configuration file is a YAML file which can:
- include other files, either at the top level (`include: base.yaml`) or
  inside a block (`fit: !include fit.yaml`);
- override single nested parameters with dot-separated keys
  (`fit.half_window: 10`).
"""

import os
import re
from copy import deepcopy

import yaml

__all__ = ["ConfigLoader", "load_config", "apply_overrides", "parse_value"]

# Keys of the form "block.sub_block.key" are interpreted as overrides
DOTTED_KEY = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*(?:\.[a-zA-Z_][a-zA-Z0-9_]*)+$")


class ConfigLoader(yaml.SafeLoader):
    """YAML loader which resolves `!include` tags relative to the file."""

    def __init__(self, stream):
        """Initialize the loader.

        Parameters
        ----------
        stream : _io.TextIOWrapper
            Output of python's `open` function on a yaml file
        """
        self._root = os.path.split(stream.name)[0]
        super().__init__(stream)

    def include(self, node):
        """Load a YAML file referenced by an `!include` tag.

        Parameters
        ----------
        node : yaml.ScalarNode
            Node containing the relative path to the file
        """
        filename = os.path.join(self._root, self.construct_scalar(node))
        with open(filename, "r", encoding="utf-8") as f:
            return yaml.load(f, Loader=ConfigLoader)


ConfigLoader.add_constructor("!include", ConfigLoader.include)


def _deep_merge(base, override):
    """Recursively merges `override` into a copy of `base`."""
    result = deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _set_nested_value(cfg, key_path, value):
    """Sets a value in a nested dictionary using a dot-separated key path.

    Parameters
    ----------
    cfg : dict
        Configuration dictionary to modify in place
    key_path : str
        Dot-separated path to the key (e.g., "fit.half_window")
    value : object
        Value to set

    Returns
    -------
    dict
        Modified configuration dictionary
    """
    keys = key_path.split(".")
    current = cfg
    for key in keys[:-1]:
        if key not in current:
            current[key] = {}
        elif not isinstance(current[key], dict):
            raise ValueError(f"Cannot set '{key_path}': '{key}' is not a dictionary")
        current = current[key]

    current[keys[-1]] = value

    return cfg


def parse_value(value_str):
    """Parses a string into the python type YAML would give it.

    Parameters
    ----------
    value_str : str
        String representation of the value

    Returns
    -------
    object
        Parsed value (the input string itself if it cannot be parsed)
    """
    if not isinstance(value_str, str):
        return value_str

    try:
        return yaml.safe_load(value_str)
    except yaml.YAMLError:
        return value_str


def apply_overrides(cfg, overrides):
    """Applies a list of `key.path=value` overrides to a configuration.

    Parameters
    ----------
    cfg : dict
        Configuration dictionary
    overrides : List[str]
        List of overrides, as provided on the command line

    Returns
    -------
    dict
        Updated configuration dictionary
    """
    for override in overrides:
        if "=" not in override:
            raise ValueError(
                f"Invalid override format: '{override}'. "
                "Expected format: 'key.path=value'"
            )

        key_path, value_str = override.split("=", 1)
        cfg = _set_nested_value(cfg, key_path.strip(), parse_value(value_str.strip()))

    return cfg


def load_config(cfg_path):
    """Load a configuration file to a dictionary.

    Parameters
    ----------
    cfg_path : str
        Path to the configuration file

    Returns
    -------
    dict
        Loaded and merged configuration dictionary
    """
    root_dir = os.path.dirname(os.path.abspath(cfg_path))
    with open(cfg_path, "r", encoding="utf-8") as f:
        main_cfg = yaml.load(f, Loader=ConfigLoader)

    if main_cfg is None:
        return {}
    if not isinstance(main_cfg, dict):
        raise ValueError(
            f"The configuration file {cfg_path} must contain a dictionary, "
            f"got {type(main_cfg)}."
        )

    # Sort the top-level keys into includes, overrides and regular blocks
    includes, overrides, blocks = [], {}, {}
    for key, value in main_cfg.items():
        if key == "include":
            if isinstance(value, str):
                includes.append(value)
            elif isinstance(value, list):
                includes.extend(value)
            else:
                raise ValueError(
                    f"'include' must be a string or list of strings, got {type(value)}"
                )
        elif DOTTED_KEY.match(key):
            overrides[key] = value
        else:
            blocks[key] = value

    # Included files first (in order), then the file itself, then overrides
    cfg = {}
    for include_file in includes:
        include_path = os.path.join(root_dir, include_file)
        if not os.path.exists(include_path):
            raise FileNotFoundError(f"Included file not found: {include_path}")
        cfg = _deep_merge(cfg, load_config(include_path))

    cfg = _deep_merge(cfg, blocks)
    for key_path, value in overrides.items():
        cfg = _set_nested_value(cfg, key_path, parse_value(value))

    return cfg
