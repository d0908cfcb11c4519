#!/usr/bin/env python
"""Command-line scripts for targeted sequencing workflows

    =========================   =============================================================================
    **Script**                  **Purpose**
    -------------------------   -----------------------------------------------------------------------------
    |target_coverage|           Calculate depth of coverage of read alignments over target regions
                                in a `BED`_ file

    |select_variants|           Select variants in target regions, optionally excluding known variants,
                                and count variants per region

    |subtract_variants|         Remove variants that overlap those of a second `VCF`_ file

    |vcf_to_tab|                Convert a `VCF`_ file to a tab-delimited table

    |index_records|             Build sidecar indexes for sorted `BED`_, `VCF`_, or `SAM`_ files
    =========================   =============================================================================

All scripts can be executed from the command line, and print help with ``-h``.
"""
