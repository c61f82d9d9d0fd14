import os

import pytest
import yaml

from ngsmap.pipeline import config_utils


@pytest.fixture
def system_yaml(tmp_path):
    config = {"log_dir": "~/ngsmap-logs",
              "algorithm": {"num_cores": 8},
              "resources": {"Picard": {"jvm_opts": ["-Xmx8g"]},
                            "bwa": {"options": ["-M"]}}}
    fname = str(tmp_path / "ngsmap_system.yaml")
    with open(fname, "w") as out_handle:
        yaml.safe_dump(config, out_handle)
    return fname


def test_defaults_without_config_file():
    config, config_file = config_utils.load_system_config(environ={})
    assert config_file is None
    assert config["algorithm"]["num_cores"] == 4
    assert config["algorithm"]["platform"] == "ILLUMINA"
    assert config["resources"]["picard"]["jvm_opts"] == ["-Xmx4g"]


def test_config_file_merges_with_defaults(system_yaml):
    config, config_file = config_utils.load_system_config(system_yaml, environ={})
    assert config_file == system_yaml
    assert config["algorithm"]["num_cores"] == 8
    assert config["algorithm"]["platform"] == "ILLUMINA"
    assert config["resources"]["picard"]["jvm_opts"] == ["-Xmx8g"]
    assert config_utils.get_options("bwa", config) == ["-M"]


def test_config_file_expands_home(system_yaml):
    config, _ = config_utils.load_system_config(system_yaml, environ={})
    assert not config["log_dir"].startswith("~")
    assert config["log_dir"].endswith("ngsmap-logs")


def test_missing_config_file_raises(tmp_path):
    with pytest.raises(ValueError):
        config_utils.load_system_config(str(tmp_path / "missing.yaml"), environ={})


def test_environment_overrides_config(system_yaml):
    environ = {"THREADS": "2", "JAVA_OPTS": "-Xmx1g -XX:+UseSerialGC"}
    config, _ = config_utils.load_system_config(system_yaml, environ=environ)
    assert config["algorithm"]["num_cores"] == 2
    assert config["resources"]["picard"]["jvm_opts"] == ["-Xmx1g", "-XX:+UseSerialGC"]


def test_empty_environment_values_are_ignored():
    config = config_utils.apply_environment(config_utils.DEFAULTS, {"THREADS": "", "JAVA_OPTS": ""})
    assert config["algorithm"]["num_cores"] == 4
    assert config["resources"]["picard"]["jvm_opts"] == ["-Xmx4g"]


def test_non_integer_threads_raises():
    with pytest.raises(ValueError):
        config_utils.apply_environment(config_utils.DEFAULTS, {"THREADS": "four"})


def test_get_resources_falls_back_to_default():
    config = {"resources": {"default": {"memory": "2G"}}}
    assert config_utils.get_resources("samtools", config) == {"memory": "2G"}
    assert config_utils.get_resources("samtools", {}) == {}


def test_get_program_uses_configured_cmd(tmp_path):
    exe = tmp_path / "my-samtools"
    exe.write_text("#!/bin/sh\n")
    exe.chmod(0o755)
    config = {"resources": {"samtools": {"cmd": str(exe)}}}
    assert config_utils.get_program("samtools", config) == str(exe)
    assert config_utils.get_program("samtools", {"config": config}) == str(exe)


def test_get_program_searches_path(tmp_path, monkeypatch):
    exe = tmp_path / "fastp"
    exe.write_text("#!/bin/sh\n")
    exe.chmod(0o755)
    monkeypatch.setenv("PATH", str(tmp_path))
    assert config_utils.get_program("fastp", {}) == os.path.join(str(tmp_path), "fastp")


def test_get_program_raises_when_missing(tmp_path, monkeypatch):
    monkeypatch.setenv("PATH", str(tmp_path))
    with pytest.raises(config_utils.CmdNotFound):
        config_utils.get_program("bwa", {})
