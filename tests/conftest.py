"""Pytest fixtures and test helper functions"""

import collections
import gzip
import os
import random
import shutil
import stat

import pytest

FAKE_TOOLS_DIR = os.path.join(os.path.dirname(__file__), "data", "fake_tools")
TOOLS = ["fastp", "bwa", "samtools", "picard"]

ToyInputs = collections.namedtuple("ToyInputs", "read_dir read1 read2 ref_file")


def _revcomp(seq):
    return seq[::-1].translate(str.maketrans("ACGT", "TGCA"))


def write_toy_data(dirname, sample="toy", n_pairs=200, ref_size=2000, read_size=70,
                   insert_size=250, seed=42):
    """Write a random reference and matched paired reads sampled from it.
    """
    rand = random.Random(seed)
    os.makedirs(dirname, exist_ok=True)
    ref = "".join(rand.choice("ACGT") for _ in range(ref_size))
    ref_file = os.path.join(dirname, "%s.fa" % sample)
    with open(ref_file, "w") as out_handle:
        out_handle.write(">chrT\n")
        for i in range(0, len(ref), 60):
            out_handle.write(ref[i:i + 60] + "\n")
    read1 = os.path.join(dirname, "%s_1.fastq.gz" % sample)
    read2 = os.path.join(dirname, "%s_2.fastq.gz" % sample)
    with gzip.open(read1, "wt") as out1, gzip.open(read2, "wt") as out2:
        for i in range(n_pairs):
            start = rand.randint(0, ref_size - insert_size)
            fragment = ref[start:start + insert_size]
            qual = "I" * read_size
            out1.write("@pair%s/1\n%s\n+\n%s\n" % (i, fragment[:read_size], qual))
            out2.write("@pair%s/2\n%s\n+\n%s\n" % (i, _revcomp(fragment)[:read_size], qual))
    return ToyInputs(dirname, read1, read2, ref_file)


class CallLog(object):
    """Read back the command lines recorded by the stand-in tools.
    """
    def __init__(self, fname):
        self.fname = fname

    def lines(self):
        if not os.path.exists(self.fname):
            return []
        with open(self.fname) as in_handle:
            return [x.strip() for x in in_handle if x.strip()]

    def called(self, prefix):
        return [x for x in self.lines() if x.startswith(prefix)]


@pytest.fixture
def toy_inputs(tmp_path):
    return write_toy_data(str(tmp_path / "reads"), n_pairs=10, ref_size=500, read_size=50,
                          insert_size=120)


@pytest.fixture
def work_dir(tmp_path, monkeypatch):
    """Provide and move into an output directory for tests"""
    out_dir = tmp_path / "work"
    out_dir.mkdir()
    monkeypatch.chdir(out_dir)
    return str(out_dir)


@pytest.fixture
def fake_tools(tmp_path, monkeypatch):
    """Put stand-in fastp, bwa, samtools and picard scripts first on the PATH.

    Each records its command line in a call log; NGSMAP_FAIL makes one fail.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    for tool in TOOLS:
        target = str(bin_dir / tool)
        shutil.copy(os.path.join(FAKE_TOOLS_DIR, tool), target)
        os.chmod(target, os.stat(target).st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    call_log = str(tmp_path / "calls.log")
    monkeypatch.setenv("PATH", "%s%s%s" % (bin_dir, os.pathsep, os.environ.get("PATH", "")))
    monkeypatch.setenv("NGSMAP_CALL_LOG", call_log)
    for var in ["NGSMAP_FAIL", "THREADS", "JAVA_OPTS"]:
        monkeypatch.delenv(var, raising=False)
    return CallLog(call_log)
