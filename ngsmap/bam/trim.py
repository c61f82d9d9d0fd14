"""Quality and adapter trimming of paired fastq reads with fastp.

https://github.com/OpenGene/fastp
"""
from ngsmap import utils
from ngsmap.log import logger
from ngsmap.pipeline import config_utils
from ngsmap.pipeline.transaction import file_transaction
from ngsmap.provenance import do
import ngsmap.pipeline.datadict as dd


def get_trim_files(data):
    """Trimmed fastq and fastp report names derived from the output prefix.
    """
    prefix = dd.get_out_prefix(data)
    out_files = ["%s_trimmed_R1.fastq.gz" % prefix, "%s_trimmed_R2.fastq.gz" % prefix]
    report = {"html": "%s_fastp.html" % prefix,
              "json": "%s_fastp.json" % prefix}
    return out_files, report

def trim_adapters(data):
    """Trim paired reads, detecting adapters automatically from read overlap.
    """
    fastq1, fastq2 = dd.get_input_files(data)
    out_files, report = get_trim_files(data)
    if all(utils.file_exists(x) for x in out_files + list(report.values())):
        logger.info("Trimmed reads present, skipping fastp: %s" % ", ".join(out_files))
    else:
        with file_transaction(data, out_files + [report["html"], report["json"]]) as tx_out:
            tx_out1, tx_out2, tx_html, tx_json = tx_out
            cmd = [config_utils.get_program("fastp", data),
                   "-i", fastq1, "-I", fastq2,
                   "-o", tx_out1, "-O", tx_out2,
                   "--detect_adapter_for_pe",
                   "--thread", dd.get_num_cores(data),
                   "-h", tx_html, "-j", tx_json]
            cmd += config_utils.get_options("fastp", data["config"])
            do.run(cmd, "Trimming with fastp", data,
                   [do.file_nonempty(tx_out1), do.file_nonempty(tx_out2)])
    data = dd.set_trimmed_files(data, out_files)
    data = dd.set_fastp_report(data, report)
    return data
