"""Quality control and summary information for a finished run.

Reports the final output files and a short set of alignment metrics.
"""
from ngsmap import utils
from ngsmap.broad.metrics import PicardMetricsParser
from ngsmap.log import logger
from ngsmap.pipeline import datadict as dd
from ngsmap.qc import samtools

def get_manifest(data):
    """Labelled final outputs, in the order they are reported.
    """
    stats = dd.get_samtools_stats(data) or {}
    fastp = dd.get_fastp_report(data) or {}
    return [("duplicate marked BAM", dd.get_work_bam(data)),
            ("BAM index", dd.get_work_bam_index(data)),
            ("statistics", " / ".join(stats[k] for k in samtools.STATS_COMMANDS if stats.get(k))),
            ("fastp report", " / ".join(fastp[k] for k in ["html", "json"] if fastp.get(k))),
            ("Picard metrics", dd.get_dedup_metrics(data))]

def summarize_metrics(data):
    """Combine samtools stats and Picard duplication metrics into one dictionary.
    """
    out = {}
    stats_file = (dd.get_samtools_stats(data) or {}).get("stats")
    if utils.file_exists(stats_file):
        out.update(samtools.parse_samtools_stats(stats_file))
    dup_vals = PicardMetricsParser().get_dup_metrics(dd.get_dedup_metrics(data))
    if "PERCENT_DUPLICATION" in dup_vals:
        out["Percent_duplication"] = dup_vals["PERCENT_DUPLICATION"]
    return out

def report(data):
    """Log the final output manifest and metrics summary.
    """
    logger.info("==== Pipeline finished ====")
    logger.info("Output files:")
    for label, fname in get_manifest(data):
        if fname:
            logger.info("- %s: %s" % (label, fname))
    metrics = summarize_metrics(data)
    if metrics:
        logger.info("Alignment summary: %s" %
                    ", ".join("%s=%s" % (k, _format_val(v)) for k, v in sorted(metrics.items())))
    return metrics

def _format_val(v):
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)
