import logging
from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml

__all__ = [
    "merge_config_dicts",
    "read_and_merge_config_files",
]

log = logging.getLogger(__name__)


def _merge_into(target: dict, source: dict, path: list[str]) -> dict:
    for key, value in source.items():
        key_path = [*path, str(key)]
        if key not in target or target[key] is None:
            target[key] = deepcopy(value)
            continue

        current = target[key]
        if value is None:
            continue

        if isinstance(current, dict) and isinstance(value, dict):
            _merge_into(current, value, key_path)
        elif type(current) is type(value):
            log.warning(f"Overriding configuration key {'.'.join(key_path)} with value: {value}")
            target[key] = deepcopy(value)
        else:
            raise ValueError(f"Conflict at {'.'.join(key_path)}: {current!r} != {value!r}")
    return target


def merge_config_dicts(a: dict, b: dict) -> dict:
    """Merge configuration dictionary ``b`` over ``a``.

    - Nested dictionaries are merged key by key.
    - Values of the same type in ``b`` replace those in ``a``.
    - ``None`` on either side yields the other value.
    - Values of different types raise a ``ValueError``.

    Neither input is modified.

    :param a: The base configuration.
    :param b: The overriding configuration.
    :return: The merged configuration.
    :raises ValueError: If a key holds values of incompatible types.
    """
    return _merge_into(deepcopy(a), b, path=[])


def read_and_merge_config_files(config_files: list[Path]) -> dict[str, Any]:
    """
    Read YAML configuration files and merge them in order, later files winning.

    Files that do not exist are skipped; empty files count as empty mappings.

    :param config_files: Paths of the configuration files.
    :return: Merged configuration dictionary.
    :raises RuntimeError: If a configuration file cannot be read or parsed.
    """
    configuration: dict[str, Any] = {}
    for config_file in map(Path, config_files):
        if not config_file.exists():
            log.debug(f"Configuration file '{config_file}' does not exist, skipping.")
            continue

        try:
            with open(config_file) as fd:
                current = yaml.safe_load(fd) or {}
            if not isinstance(current, dict):
                raise ValueError("top-level YAML value must be a mapping")
            configuration = merge_config_dicts(configuration, current)
        except Exception as e:
            raise RuntimeError(f"Error reading configuration file: '{config_file}'") from e

    return configuration
