"""Parse commandline arguments for running the mapping pipeline.

Keeps the positional interface `[sample_name] [read_dir] [reference] [out_prefix]`
and maps failures onto process exit codes: 1 for usage errors and missing
reads, 127 for programs that cannot be found, otherwise the exit code of the
failing external command.
"""
import argparse
import subprocess
import sys

from ngsmap.pipeline import config_utils, run_info
from ngsmap.pipeline.main import run_main

EXAMPLES = """examples:
  %(prog)s                           # use default values
  %(prog)s MY_SAMPLE                 # specify the sample name
  %(prog)s MY_SAMPLE /path/to/reads  # specify sample name and read directory

environment:
  THREADS    threads passed to fastp, bwa and samtools (default: 4)
  JAVA_OPTS  JVM options passed to picard (default: -Xmx4g)
"""

class UsageArgumentParser(argparse.ArgumentParser):
    """Print full usage and exit with status 1 on argument errors.
    """
    def error(self, message):
        self.print_help(sys.stderr)
        sys.stderr.write("\nerror: %s\n" % message)
        sys.exit(1)

def get_parser(prog=None):
    parser = UsageArgumentParser(
        prog=prog, add_help=False,
        description="Trim, align, sort, mark duplicates and summarize paired-end reads.",
        epilog=EXAMPLES, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("sample_name", nargs="?", default="sample",
                        help=("Name of the sample to process (default: sample). "
                              "Reads are found with <sample_name>*_1.fastq.gz and "
                              "<sample_name>*_2.fastq.gz"))
    parser.add_argument("read_dir", nargs="?", default=".",
                        help="Directory containing the FASTQ files (default: current directory)")
    parser.add_argument("reference", nargs="?", default="hg38.fa",
                        help="Reference genome FASTA to align to (default: hg38.fa)")
    parser.add_argument("out_prefix", nargs="?", default=None,
                        help="Prefix for output files (default: same as sample_name)")
    parser.add_argument("-c", "--config",
                        help="YAML configuration file with program and resource settings")
    parser.add_argument("--log-dir",
                        help="Also write log files to this directory")
    parser.add_argument("--workdir",
                        help="Directory to write outputs in. Defaults to current working directory")
    parser.add_argument("-v", "--verbose", action="store_true", default=False,
                        help="Show command lines and tool output on the console")
    parser.add_argument("-h", "--help", action="store_true", default=False,
                        help="Show this help message and exit")
    return parser

def parse_cl_args(in_args, prog=None):
    """Parse input commandline arguments, printing usage and exiting with 1 for help.
    """
    parser = get_parser(prog)
    args = parser.parse_intermixed_args(in_args)
    if args.help:
        parser.print_help()
        sys.exit(1)
    if args.out_prefix is None:
        args.out_prefix = args.sample_name
    return parser, args

def main(in_args=None, prog=None):
    if in_args is None:
        in_args = sys.argv[1:]
    parser, args = parse_cl_args(in_args, prog)
    try:
        run_main(sample_name=args.sample_name, read_dir=args.read_dir,
                 ref_file=args.reference, out_prefix=args.out_prefix,
                 config_file=args.config, log_dir=args.log_dir,
                 workdir=args.workdir, verbose=args.verbose)
    except run_info.ReadsNotFound as msg:
        sys.stderr.write("Error: %s\n\n" % msg)
        parser.print_help()
        sys.exit(1)
    except config_utils.CmdNotFound as msg:
        sys.stderr.write("Error: %s\n" % msg)
        sys.exit(127)
    except subprocess.CalledProcessError as msg:
        sys.exit(_shell_exitcode(msg.returncode))
    except (IOError, ValueError) as msg:
        sys.stderr.write("Error: %s\n" % msg)
        sys.exit(1)

def _shell_exitcode(returncode):
    """Report commands killed by a signal the way a shell does, as 128 + signal.
    """
    return 128 - returncode if returncode < 0 else returncode
