#!/usr/bin/env python -Es
"""Map paired-end short reads to a reference genome.

Finds <sample_name>*_1.fastq.gz and <sample_name>*_2.fastq.gz below
<read_dir> and runs, in order: fastp trimming, bwa index (when the
reference has no .bwt index), bwa mem alignment with read group, samtools
conversion and sort, Picard MarkDuplicates, samtools index and samtools
flagstat/idxstats/stats.

Usage:
  ngsmap_pipeline.py [sample_name] [read_dir] [reference] [out_prefix]
     -c YAML configuration file with program and resource settings
     --log-dir directory for log files
     --workdir directory to write outputs in

The THREADS and JAVA_OPTS environment variables set the thread count and
picard JVM options.
"""
import os
import sys

from ngsmap.pipeline.clargs import main

if __name__ == "__main__":
    main(sys.argv[1:], prog=os.path.basename(sys.argv[0]))
