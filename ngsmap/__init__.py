"""Paired-end short read mapping pipeline wrapping fastp, bwa, samtools and picard.
"""
