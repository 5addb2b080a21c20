# What it does: Manages all read/write operations for the `.twig/config` file
# What data structure it uses: Map / Hash Table / Dictionary (the INI file format is a map of sections to key-value pairs, managed by Python's `configparser`)

import configparser
import os

from .errors import InvalidConfigKeyError

DEFAULTS = {
    'core.abbrev': '7',
    'core.loglevel': 'WARNING',
}


def get_config_path(repo_root):  # Returns the path to the config file within the repository
    return os.path.join(repo_root, '.twig', 'config')


def _split_key(key):
    try:
        section, option = key.split('.', 1)
    except ValueError:
        raise InvalidConfigKeyError()
    if not section or not option:
        raise InvalidConfigKeyError()
    return section, option


def read_config(repo_root): # Reads and returns the configuration as a ConfigParser object
    config = configparser.ConfigParser()
    if repo_root:
        config_path = get_config_path(repo_root)
        if os.path.exists(config_path):
            config.read(config_path)
    return config


def write_config(repo_root, key, value): # Sets a configuration key to a value and writes it to the config file
    section, option = _split_key(key)
    config = read_config(repo_root)

    if not config.has_section(section):
        config.add_section(section)

    config.set(section, option, value)

    with open(get_config_path(repo_root), 'w') as configfile:
        config.write(configfile)


def write_defaults(repo_root): # Used by `init`
    for key, value in DEFAULTS.items():
        write_config(repo_root, key, value)


def get_config_value(repo_root, key, fallback=None): # Retrieves a value, falling back to the built-in default
    section, option = _split_key(key)
    if fallback is None:
        fallback = DEFAULTS.get(key)
    return read_config(repo_root).get(section, option, fallback=fallback)


def get_abbrev(repo_root): # Width of abbreviated commit ids
    try:
        value = int(get_config_value(repo_root, 'core.abbrev'))
    except ValueError:
        value = int(DEFAULTS['core.abbrev'])
    return max(4, value)
