#!/usr/bin/env python
"""This package contains object types and functions for finding genomic
records that overlap regions of interest.

Package overview
================

    =================================================  ==================================================================
    **Submodule**                                      **Description**
    -------------------------------------------------  ------------------------------------------------------------------
    :py:mod:`~regiontools.genomics.roitools`           Regions, and records read from `BED`_, `VCF`_, and `SAM`_ files

    :py:mod:`~regiontools.genomics.linear_index`       Linear indexes mapping contig bins to file offsets

    :py:mod:`~regiontools.genomics.index_store`        Saving and loading indexes as sidecar files

    :py:mod:`~regiontools.genomics.region_query`       Finding records that overlap a region, using an index

    :py:mod:`~regiontools.genomics.genome_hash`        File-backed objects that look up records overlapping a region

    :py:mod:`~regiontools.genomics.coverage`           Per-region depth of coverage from read alignments

    :py:mod:`~regiontools.genomics.read_filters`       Predicates that exclude read alignments from coverage

    :py:mod:`~regiontools.genomics.overlap`            Filtering and subtracting records by overlap
    =================================================  ==================================================================
"""
