"""Main entry point for the paired-end read mapping pipeline.

Runs trimming, reference indexing, alignment, sorting, duplicate marking,
BAM indexing and statistics in order. Each stage feeds its output files to
the next and the first failing stage stops the run.
"""
import os

from ngsmap import bam, log, utils
from ngsmap.bam import trim
from ngsmap.log import logger
from ngsmap.ngsalign import bwa, postalign
from ngsmap.pipeline import config_utils, qcsummary, run_info
from ngsmap.pipeline import datadict as dd
from ngsmap.qc import samtools

STAGES = [("Trimming reads with fastp", trim.trim_adapters),
          ("Checking bwa index", bwa.index_ref),
          ("Aligning with bwa mem", bwa.align_pair),
          ("Converting SAM to BAM and sorting", bam.sam_to_sorted_bam),
          ("Marking duplicate reads", postalign.dedup_bam),
          ("Indexing BAM", bam.index),
          ("Writing BAM statistics", samtools.run)]

def run_main(sample_name="sample", read_dir=".", ref_file="hg38.fa", out_prefix=None,
             config_file=None, log_dir=None, workdir=None, verbose=False):
    """Run the pipeline for one sample, handling configuration and logging setup.

    Returns the final sample data dictionary.
    """
    config, config_file = config_utils.load_system_config(config_file)
    if log_dir:
        config["log_dir"] = log_dir
    handler = log.setup_local_logging(config, verbose)
    try:
        read1, read2 = run_info.find_read_pair(sample_name, read_dir)
        if workdir:
            utils.safe_makedir(workdir)
        data = run_info.build_data(sample_name, [read1, read2], ref_file,
                                   out_prefix or sample_name, config, workdir)
        if config_file:
            logger.info("System YAML configuration: %s" % os.path.abspath(config_file))
        return run_pipeline(data)
    finally:
        handler.pop_thread()
        handler.close()

def run_pipeline(data):
    """Run each stage in order on the sample data dictionary.
    """
    read1, read2 = dd.get_input_files(data)
    logger.info("==== NGS read mapping pipeline ====")
    logger.info("Sample: %s" % dd.get_sample_name(data))
    logger.info("Reads:")
    logger.info("- R1: %s" % read1)
    logger.info("- R2: %s" % read2)
    logger.info("Reference: %s" % dd.get_ref_file(data))
    logger.info("Output prefix: %s" % dd.get_out_prefix(data))
    for i, (descr, fn) in enumerate(STAGES):
        logger.info("%s. %s" % (i + 1, descr))
        data = fn(data)
    qcsummary.report(data)
    return data
