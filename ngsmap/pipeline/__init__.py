"""High level code for driving the read mapping pipeline.

This structures processing steps into the following modules:

  - clargs.py: Commandline parsing and exit codes.
  - main.py: Run each stage for a sample in order.
    - run_info.py: Locate paired fastq inputs and build the sample data.
    - config_utils.py: System configuration and program lookup.
    - qcsummary.py: Final output manifest and metrics summary.
"""
