"""Functionality to convert, sort and index aligned BAM files with samtools.
"""
import os

from ngsmap import utils
from ngsmap.log import logger
from ngsmap.pipeline import config_utils
from ngsmap.pipeline.transaction import file_transaction
import ngsmap.pipeline.datadict as dd
from ngsmap.provenance import do

def is_bam(in_file):
    _, ext = os.path.splitext(in_file)
    return ext == ".bam"

def is_sam(in_file):
    _, ext = os.path.splitext(in_file)
    return ext == ".sam"

def sam_to_sorted_bam(data):
    """Convert the alignment SAM to a coordinate sorted BAM in a single samtools pipe.
    """
    in_file = dd.get_align_sam(data)
    assert is_sam(in_file), "%s in not a SAM file" % in_file
    out_file = "%s.sorted.bam" % dd.get_out_prefix(data)
    if utils.file_exists(out_file):
        logger.info("Sorted BAM present, skipping conversion: %s" % out_file)
    else:
        samtools = config_utils.get_program("samtools", data)
        num_cores = dd.get_num_cores(data)
        with file_transaction(data, out_file) as tx_out_file:
            cmd = ("{samtools} view -@ {num_cores} -bS {in_file} | "
                   "{samtools} sort -@ {num_cores} -o {tx_out_file} -")
            do.run(cmd.format(**locals()), "Convert SAM to sorted BAM", data,
                   [do.file_nonempty(tx_out_file)])
    return dd.set_sorted_bam(data, out_file)

def index(data):
    """Index the working BAM file, skipping if index present.
    """
    in_bam = dd.get_work_bam(data)
    assert is_bam(in_bam), "%s in not a BAM file" % in_bam
    index_file = "%s.bai" % in_bam
    if utils.file_exists(index_file):
        logger.info("BAM index present, skipping: %s" % index_file)
    else:
        samtools = config_utils.get_program("samtools", data)
        with file_transaction(data, index_file) as tx_index_file:
            cmd = [samtools, "index", in_bam, tx_index_file]
            do.run(cmd, "Index BAM file: %s" % os.path.basename(in_bam), data,
                   [do.file_nonempty(tx_index_file)])
    return dd.set_work_bam_index(data, index_file)
