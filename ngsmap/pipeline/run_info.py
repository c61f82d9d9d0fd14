"""Retrieve run information describing a sample to process.

Locates the paired fastq inputs for a sample and assembles the `data`
dictionary passed between pipeline stages.
"""
import os

from ngsmap import utils
from ngsmap.log import logger
from ngsmap.pipeline import datadict as dd

READ1_SUFFIX = "_1.fastq.gz"
READ2_SUFFIX = "_2.fastq.gz"


class ReadsNotFound(ValueError):
    pass


class MismatchedReads(ReadsNotFound):
    pass


def read_pattern(sample_name):
    return "%s*" % sample_name

def _find_candidates(sample_name, read_dir, suffix):
    pattern = "%s*%s" % (read_pattern(sample_name), suffix)
    if not os.path.isdir(read_dir):
        return []
    return sorted(utils.locate(pattern, read_dir))

def find_read_pair(sample_name, read_dir="."):
    """Find the first read 1 and read 2 fastq pair for a sample under read_dir.

    Searches recursively for `{sample}*_1.fastq.gz` and `{sample}*_2.fastq.gz`.
    Candidates are sorted and the first read 1 file with a read 2 mate sharing
    its name stem is used. Multiple complete pairs log a warning; read files
    present without a matching mate raise MismatchedReads.
    """
    read1s = _find_candidates(sample_name, read_dir, READ1_SUFFIX)
    read2s = _find_candidates(sample_name, read_dir, READ2_SUFFIX)
    if not read1s or not read2s:
        raise ReadsNotFound("Read files not found. Pattern: %s" % read_pattern(sample_name))
    available = set(read2s)
    pairs = []
    for read1 in read1s:
        read2 = read1[:-len(READ1_SUFFIX)] + READ2_SUFFIX
        if read2 in available:
            pairs.append((read1, read2))
    if not pairs:
        raise MismatchedReads("Read files for pattern %s do not form a pair. Read 1: %s; read 2: %s"
                              % (read_pattern(sample_name), ", ".join(read1s), ", ".join(read2s)))
    if len(pairs) > 1:
        logger.warn("Multiple read pairs match pattern %s, using the first: %s"
                    % (read_pattern(sample_name),
                       "; ".join("%s + %s" % p for p in pairs)))
    return pairs[0]

def build_data(sample_name, files, ref_file, out_prefix, config, work_dir=None):
    """Assemble the sample data dictionary used by all pipeline stages.
    """
    work_dir = os.path.abspath(work_dir or os.getcwd())
    rg_name = out_prefix
    if not os.path.isabs(out_prefix):
        out_prefix = os.path.join(work_dir, out_prefix)
    data = {"rgnames": {"sample": sample_name,
                        "rg": rg_name},
            "files": list(files),
            "reference": {"fasta": {"base": ref_file}},
            "out_prefix": out_prefix,
            "dirs": {"work": work_dir},
            "config": config}
    return data

def get_rg_info(data):
    """Read group header line for the aligner, using the output prefix as ID and sample.
    """
    rg = dd.get_rg(data)
    return r"@RG\tID:{rg}\tSM:{rg}\tPL:{pl}".format(rg=rg, pl=dd.get_platform(data))
