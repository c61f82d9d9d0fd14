"""Next-gen alignments with BWA (http://bio-bwa.sourceforge.net/)
"""
import os

from ngsmap import utils
from ngsmap.log import logger
from ngsmap.pipeline import config_utils, run_info
from ngsmap.pipeline.transaction import file_transaction
from ngsmap.provenance import do
import ngsmap.pipeline.datadict as dd

INDEX_EXTS = [".amb", ".ann", ".bwt", ".pac", ".sa"]

def index_marker(ref_file):
    return ref_file + ".bwt"

def index_ref(data):
    """Build a bwa index of the reference, unless a `.bwt` index file is present.

    Only the presence of the index file is checked, not its integrity.
    """
    ref_file = dd.get_ref_file(data)
    if os.path.exists(index_marker(ref_file)):
        logger.info("bwa index found for %s, skipping index build." % ref_file)
    else:
        logger.info("bwa index not found for %s, building." % ref_file)
        build_bwa_index(ref_file, data)
    return dd.set_bwa_index(data, ref_file)

def build_bwa_index(fasta_file, data):
    bwa = config_utils.get_program("bwa", data)
    cmd = [bwa, "index", fasta_file]
    do.run(cmd, "Creating bwa index of %s" % fasta_file, data,
           [do.file_exists(fasta_file + ext) for ext in INDEX_EXTS])
    return fasta_file

def _get_bwa_mem_cmd(data, ref_file, fastq1, fastq2):
    bwa = config_utils.get_program("bwa", data)
    num_cores = dd.get_num_cores(data)
    bwa_params = " ".join(config_utils.get_options("bwa", data["config"]))
    rg_info = run_info.get_rg_info(data)
    bwa_cmd = ("{bwa} mem -t {num_cores} {bwa_params} -R '{rg_info}' "
               "{ref_file} {fastq1} {fastq2}")
    return " ".join(bwa_cmd.format(**locals()).split())

def align_pair(data):
    """Align trimmed paired reads with bwa mem, writing a SAM file with read group information.
    """
    fastq1, fastq2 = dd.get_trimmed_files(data)
    ref_file = dd.get_bwa_index(data) or dd.get_ref_file(data)
    out_file = "%s.sam" % dd.get_out_prefix(data)
    if utils.file_exists(out_file):
        logger.info("Alignment present, skipping bwa mem: %s" % out_file)
    else:
        with file_transaction(data, out_file) as tx_out_file:
            cmd = "%s > %s" % (_get_bwa_mem_cmd(data, ref_file, fastq1, fastq2), tx_out_file)
            do.run(cmd, "bwa mem alignment from fastq", data,
                   [do.file_nonempty(tx_out_file)])
    return dd.set_align_sam(data, out_file)
