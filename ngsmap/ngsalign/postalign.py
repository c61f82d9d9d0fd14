"""Post-alignment preparation of sorted BAMs.
"""
from ngsmap import broad, utils
from ngsmap.log import logger
import ngsmap.pipeline.datadict as dd

def get_dedup_files(data):
    prefix = dd.get_out_prefix(data)
    return "%s.dedup.bam" % prefix, "%s.dedup_metrics.txt" % prefix

def dedup_bam(data):
    """Mark duplicate reads in the sorted BAM with Picard MarkDuplicates.

    Duplicates are flagged, not removed.
    """
    in_bam = dd.get_sorted_bam(data)
    out_file, metrics_file = get_dedup_files(data)
    if utils.file_exists(out_file) and utils.file_exists(metrics_file):
        logger.info("Duplicate marked BAM present, skipping: %s" % out_file)
    else:
        picard = broad.runner_from_config(data)
        out_file, metrics_file = picard.run_fn("picard_mark_duplicates", in_bam,
                                               out_file, metrics_file)
    data = dd.set_work_bam(data, out_file)
    return dd.set_dedup_metrics(data, metrics_file)
