#!/usr/bin/env python
"""Welcome to regiontools!

This package contains command-line tools and libraries that find the records
of sorted genomic files (`BED`_, `VCF`_, `SAM`_, and `BAM`_) that overlap
regions of interest, without reading whole files into memory. To this end, it
provides:

  #. A set of command-line scripts that compute depth of coverage over target
     regions, select or subtract variants by overlap, and convert `VCF`_ files
     to tables (see |bin|).

  #. Linear indexes of sorted record files, saved as sidecar files next to the
     files they index, and region queries that use them (see |genomics|).

  #. Readers that parse record files into a small set of object types
     (see |readers|)


Package overview
----------------
regiontools is divided into the following subpackages:

    ==============    =========================================================
    Package           Contents
    --------------    ---------------------------------------------------------
    |bin|             Command-line scripts
    |genomics|        Regions, records, indexes, region queries, coverage, and overlap filters
    |readers|         Parsers for various file formats
    |util|            Utilities (e.g. function decorators, exceptions, argument parsers)
    |test|            Unit and functional tests
    ==============    =========================================================

"""
__version__ = "0.1.0"

from regiontools.genomics.roitools import Region, Record, BedFeature, VariantRecord, AlignmentRecord
from regiontools.genomics.linear_index import LinearIndex, build_index, DEFAULT_BIN_SIZE
from regiontools.genomics.index_store import load_or_build, read_index, write_index
from regiontools.genomics.region_query import query
from regiontools.genomics.genome_hash import IndexedGenomeHash, BAMGenomeHash
from regiontools.genomics.coverage import accumulate
from regiontools.genomics.read_filters import filter_read
from regiontools.genomics.overlap import filter_by_overlap, OverlapFilter, KEEP_IF_OVERLAP, DROP_IF_OVERLAP

from regiontools.readers.bed import BED_Reader
from regiontools.readers.vcf import VCF_Reader
from regiontools.readers.sam import SAM_Reader

from regiontools.util.io.openers import read_pl_table

from regiontools.util.services.exceptions import formatwarning
