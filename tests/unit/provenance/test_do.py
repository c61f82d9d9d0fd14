import subprocess

import logbook
import pytest

from ngsmap.provenance import do


def test_run_list_command():
    do.run(["true"], log_error=False)


def test_run_raises_with_exit_code_and_output():
    with pytest.raises(subprocess.CalledProcessError) as excinfo:
        do.run("echo tool output; exit 3", log_error=False)
    assert excinfo.value.returncode == 3
    assert "tool output" in excinfo.value.cmd


def test_pipes_fail_on_intermediate_error():
    with pytest.raises(subprocess.CalledProcessError) as excinfo:
        do.run("false | cat", log_error=False)
    assert excinfo.value.returncode == 1


def test_normalize_cmd_args():
    assert do._normalize_cmd_args(["samtools", "index", 1]) == (["samtools", "index", "1"], False, None)
    assert do._normalize_cmd_args("bwa mem ref.fa > out.sam") == ("bwa mem ref.fa > out.sam", True, None)
    cmd, shell, executable = do._normalize_cmd_args("samtools view in.sam | samtools sort -")
    assert cmd.startswith("set -o pipefail; ")
    assert shell
    assert executable.endswith("bash")


def test_checks_detect_missing_output(tmp_path):
    out_file = str(tmp_path / "out.txt")
    with pytest.raises(IOError):
        do.run(["true"], checks=[do.file_nonempty(out_file)], log_error=False)


def test_checks_pass_for_written_output(tmp_path):
    out_file = str(tmp_path / "out.txt")
    do.run("echo done > %s" % out_file, checks=[do.file_nonempty(out_file)])


def test_descr_includes_sample_name():
    data = {"rgnames": {"sample": "toy"}}
    assert do._descr_str("bwa mem alignment", data) == "bwa mem alignment : toy"
    assert do._descr_str("bwa mem alignment", None) == "bwa mem alignment"


def test_tool_output_logged_at_debug():
    with logbook.TestHandler() as handler:
        do.run(["echo", "Processed 200 reads"], "echo reads")
    assert handler.has_debug("Processed 200 reads", channel="ngsmap")
    assert handler.has_debug("echo Processed 200 reads", channel="ngsmap-commands")
