#!/usr/bin/env python

"""Setup file and install script for the paired-end read mapping pipeline"""

import setuptools

VERSION = '0.1.0'

# external tools (fastp, bwa, samtools, picard) are installed via Conda
setuptools.setup(name="ngsmap",
                 version=VERSION,
                 description="Paired-end short read mapping pipeline wrapping fastp, bwa, samtools and picard",
                 packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
                 scripts=["scripts/ngsmap_pipeline.py"],
                 python_requires=">=3.7",
                 install_requires=["Logbook", "toolz", "PyYAML"],
                 extras_require={"test": ["pytest", "mock", "pytest-mock"]})
