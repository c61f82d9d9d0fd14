"""
functions to access the data dictionary in a clearer way
"""

import os

import toolz as tz

def bwa_index_exists(ref_file):
    """bwa only needs the index files, the reference FASTA may be absent.
    """
    return os.path.exists("%s.bwt" % ref_file)

LOOKUPS = {
    "config": {"keys": ['config']},
    "tmp_dir": {"keys": ['config', 'resources', 'tmp', 'dir']},
    "num_cores": {"keys": ['config', 'algorithm', 'num_cores'],
                  "default": 1},
    "platform": {"keys": ['config', 'algorithm', 'platform'],
                 "default": "ILLUMINA"},
    "ref_file": {"keys": ["reference", "fasta", "base"]},
    "bwa_index": {"keys": ["reference", "bwa", "base"],
                  "checker": bwa_index_exists},
    "work_dir": {"keys": ['dirs', 'work']},
    "sample_name": {"keys": ['rgnames', 'sample']},
    "rg": {"keys": ['rgnames', 'rg']},
    "out_prefix": {"keys": ['out_prefix']},
    "input_files": {"keys": ['files'], "default": [], "always_list": True},
    "trimmed_files": {"keys": ['trimmed_files'], "default": [], "always_list": True},
    "fastp_report": {"keys": ['qc', 'fastp']},
    "align_sam": {"keys": ['align_sam']},
    "sorted_bam": {"keys": ['sorted_bam']},
    "work_bam": {"keys": ['work_bam']},
    "work_bam_index": {"keys": ['work_bam_index']},
    "dedup_metrics": {"keys": ['qc', 'dedup_metrics']},
    "samtools_stats": {"keys": ['qc', 'samtools']},
}

def getter(keys, global_default=None, always_list=False):
    def lookup(data, default=None):
        default = global_default if not default else default
        v = tz.get_in(keys, data, default)
        if always_list and v is not None and not isinstance(v, (list, tuple)):
            v = [v]
        return v
    return lookup

def setter(keys, checker):
    def update(data, value):
        if checker and not checker(value):
            raise ValueError("%s was set to %s, which did not pass %s."
                             % (keys, value, checker.__name__))
        return tz.update_in(data, keys, lambda x: value)
    return update

def is_setter(keys):
    def present(data):
        try:
            v = tz.get_in(keys, data, no_default=True)
        except KeyError:
            return False
        return v is not None
    return present

_g = globals()
for k, v in LOOKUPS.items():
    keys = v['keys']
    getter_fn = 'get_' + k
    if getter_fn not in _g:
        _g["get_" + k] = getter(keys, v.get('default', None), v.get("always_list", False))
    setter_fn = 'set_' + k
    if setter_fn not in _g:
        _g["set_" + k] = setter(keys, v.get('checker', None))
    is_setter_fn = "is_set_" + k
    if is_setter_fn not in _g:
        _g["is_set_" + k] = is_setter(keys)
