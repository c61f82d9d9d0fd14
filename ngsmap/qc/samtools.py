"""Quality control metrics from samtools.
"""
from ngsmap.pipeline.transaction import file_transaction
from ngsmap import utils
from ngsmap.log import logger
from ngsmap.pipeline import config_utils
from ngsmap.pipeline import datadict as dd
from ngsmap.provenance import do

STATS_COMMANDS = ["flagstat", "idxstats", "stats"]

def get_stats_files(data):
    prefix = dd.get_out_prefix(data)
    return dict((subcmd, "%s.%s.txt" % (prefix, subcmd)) for subcmd in STATS_COMMANDS)

def run(data):
    """Run samtools flagstat, idxstats and stats on the duplicate marked BAM.
    """
    bam_file = dd.get_work_bam(data)
    out = get_stats_files(data)
    for subcmd in STATS_COMMANDS:
        out_file = out[subcmd]
        if utils.file_exists(out_file):
            logger.info("samtools %s present, skipping: %s" % (subcmd, out_file))
            continue
        samtools = config_utils.get_program("samtools", data)
        with file_transaction(data, out_file) as tx_out_file:
            cmd = "{samtools} {subcmd} {bam_file} > {tx_out_file}"
            do.run(cmd.format(**locals()), "samtools %s" % subcmd, data,
                   [do.file_nonempty(tx_out_file)])
    return dd.set_samtools_stats(data, out)

def parse_samtools_stats(stats_file):
    out = {}
    want = {"raw total sequences": "Total_reads",
            "reads mapped": "Mapped_reads",
            "reads mapped and paired": "Mapped_paired_reads",
            "reads duplicated": "Duplicates",
            "insert size average": "Average_insert_size",
            "average length": "Average_read_length",
            }
    with open(stats_file) as in_handle:
        for line in in_handle:
            if not line.startswith("SN"):
                continue
            parts = line.split("\t")
            metric, stat_str = parts[1:3]
            metric = metric.replace(":", "").strip()
            if metric in want:
                stat = float(stat_str.strip())
                out[want[metric]] = stat
    # Ensure we have zero values for any metrics not present in stats output
    for metric in want.values():
        if metric not in out:
            out[metric] = 0
    return out
