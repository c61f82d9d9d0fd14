"""Loads configurations from .yaml files and expands environment variables.

Configuration is layered: built in defaults, an optional YAML system
configuration file, then the THREADS and JAVA_OPTS environment variables.
"""
import copy
import os
import shlex

import toolz as tz
import yaml

from ngsmap import utils


class CmdNotFound(Exception):
    pass

DEFAULT_THREADS = 4
DEFAULT_JAVA_OPTS = "-Xmx4g"

DEFAULTS = {"algorithm": {"num_cores": DEFAULT_THREADS,
                          "platform": "ILLUMINA"},
            "resources": {"picard": {"jvm_opts": [DEFAULT_JAVA_OPTS]}}}

# ## Retrieval functions

def load_system_config(config_file=None, environ=None):
    """Load the system configuration, applying defaults and environment overrides.

    Returns the merged configuration dictionary and the configuration file used,
    which is None when running with defaults only.
    """
    config = copy.deepcopy(DEFAULTS)
    if config_file:
        if not os.path.exists(config_file):
            raise ValueError("Could not find input system configuration file %s" % config_file)
        config = tz.merge_with(_merge_section, config, load_config(config_file))
    config = apply_environment(config, environ)
    return config, config_file

def _merge_section(vals):
    if all(isinstance(v, dict) for v in vals):
        return tz.merge_with(_merge_section, *vals)
    return vals[-1]

def apply_environment(config, environ=None):
    """Override thread count and picard JVM options from THREADS and JAVA_OPTS.
    """
    if environ is None:
        environ = os.environ
    config = copy.deepcopy(config)
    if environ.get("THREADS"):
        try:
            num_cores = int(environ["THREADS"])
        except ValueError:
            raise ValueError("THREADS must be an integer, got: %s" % environ["THREADS"])
        config = tz.assoc_in(config, ["algorithm", "num_cores"], num_cores)
    if environ.get("JAVA_OPTS"):
        config = tz.assoc_in(config, ["resources", "picard", "jvm_opts"],
                             shlex.split(environ["JAVA_OPTS"]))
    return config

def load_config(config_file):
    """Load YAML config file, replacing environmental variables.
    """
    with open(config_file) as in_handle:
        config = yaml.safe_load(in_handle) or {}
    config = _expand_paths(config)
    if 'resources' not in config:
        config['resources'] = {}
    # lowercase resource names, the preferred way to specify
    newr = {}
    for k, v in config["resources"].items():
        if k.lower() != k:
            newr[k.lower()] = v
    config["resources"].update(newr)
    return config

def _expand_paths(config):
    for field, setting in config.items():
        if isinstance(config[field], dict):
            config[field] = _expand_paths(config[field])
        else:
            config[field] = expand_path(setting)
    return config

def expand_path(path):
    """ Combines os.path.expandvars with replacing ~ with $HOME.
    """
    try:
        return os.path.expandvars(path.replace("~", "$HOME"))
    except AttributeError:
        return path

def get_resources(name, config):
    """Retrieve resources for a program, pulling from multiple config sources.
    """
    return tz.get_in(["resources", name], config,
                     tz.get_in(["resources", "default"], config, {}))

def get_options(name, config):
    """Retrieve extra commandline options for a program as a list of strings.
    """
    return [str(x) for x in get_resources(name, config).get("options", [])]

def get_program(name, config, default=None):
    """Retrieve the full path to a program from the configuration.

    Uses `resources: {name: {cmd: ...}}` when specified, otherwise the
    program name, and resolves it against the PATH.
    """
    # support taking in the data dictionary
    config = config.get("config", config)
    pconfig = tz.get_in(["resources", name], config, {})
    program = expand_path(_get_program_cmd(name, pconfig, default))
    full_path = utils.which(program)
    if full_path is None:
        raise CmdNotFound("Could not find program '%s' (configured as '%s') on PATH" % (name, program))
    return full_path

def _get_program_cmd(name, pconfig, default):
    """Retrieve commandline of a program.
    """
    if pconfig is None:
        return name
    elif isinstance(pconfig, str):
        return pconfig
    elif "cmd" in pconfig:
        return pconfig["cmd"]
    elif default is not None:
        return default
    else:
        return name
