"""Convenience functions for running common Picard utilities.
"""
from ngsmap.pipeline.transaction import file_transaction
from ngsmap.provenance import do
from ngsmap.utils import file_exists


def picard_mark_duplicates(picard, align_bam, dup_bam, dup_metrics, remove_dups=False):
    """Flag duplicate reads in a coordinate sorted BAM file, writing duplication metrics.
    """
    if not file_exists(dup_bam):
        with file_transaction(picard._data, dup_bam, dup_metrics) as (tx_dup_bam, tx_dup_metrics):
            opts = [("INPUT", align_bam),
                    ("OUTPUT", tx_dup_bam),
                    ("METRICS_FILE", tx_dup_metrics),
                    ("REMOVE_DUPLICATES", "true" if remove_dups else "false"),
                    ("ASSUME_SORTED", "true"),
                    ("VALIDATION_STRINGENCY", "LENIENT")]
            picard.run("MarkDuplicates", opts,
                       [do.file_nonempty(tx_dup_bam), do.file_nonempty(tx_dup_metrics)])
    return dup_bam, dup_metrics
