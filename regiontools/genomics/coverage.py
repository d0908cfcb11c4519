#!/usr/bin/env python
"""Per-region depth of coverage from read alignments.

:func:`accumulate` builds a per-position depth profile over a region from the
aligned blocks of reads, and summarizes it as a |CoverageSummary|. Each aligned
block of a read adds one to the depth of every position it covers inside the
region, so a read spliced across an intron adds nothing to the intron.

Two measures of coverage are reported:

    `mean_coverage`
        Number of reads counted, divided by the length of the region, i.e.
        reads per nucleotide. This is the value written by
        :mod:`~regiontools.bin.target_coverage`.

    `mean_depth`
        Mean of the per-position depth profile.
"""
import numpy
from regiontools.genomics.roitools import Region

DEFAULT_THRESHOLD = 10
"""Default depth that positions must reach to count towards `threshold_coverage_bases`"""


class CoverageSummary(object):
    """Summary of coverage over a single region

    Attributes
    ----------
    region : |Region|
        Region summarized

    length : int
        Length of region, in nucleotides

    read_count : int
        Number of reads that passed the filter

    mean_coverage : float
        `read_count / length`

    mean_depth : float
        Mean depth across positions of the region

    zero_coverage_bases : int
        Number of positions with depth 0

    threshold_coverage_bases : int
        Number of positions with depth greater than or equal to `threshold`

    threshold : int
        Depth threshold used for `threshold_coverage_bases`
    """

    def __init__(self,region,read_count,profile,threshold=DEFAULT_THRESHOLD):
        self.region     = region
        self.length     = len(region)
        self.read_count = read_count
        self.threshold  = threshold
        self.mean_coverage = float(read_count) / self.length
        self.mean_depth    = float(profile.mean())
        self.zero_coverage_bases      = int((profile == 0).sum())
        self.threshold_coverage_bases = int((profile >= threshold).sum())

    def __repr__(self):
        return "<%s %s reads=%s coverage=%.3f>" % (self.__class__.__name__,
                                                   self.region,
                                                   self.read_count,
                                                   self.mean_coverage)


def get_blocks(record):
    """Return aligned blocks of `record` as (`start`, `length`) tuples, 1-based.
    Records without a `blocks` attribute, such as BED features, are treated as
    one block spanning `start` to `end`. Alignments without aligned bases
    (e.g. CIGAR `*`, or reads that are entirely clipped) have no blocks.
    """
    if hasattr(record,"get_blocks"):
        # pysam.AlignedSegment, 0-based half-open
        return [(X[0] + 1,X[1] - X[0]) for X in record.get_blocks()]

    blocks = getattr(record,"blocks",None)
    if blocks is None:
        return [(record.start,record.end - record.start + 1)]

    return blocks

def accumulate(region,records,filter_func=None,threshold=DEFAULT_THRESHOLD):
    """Compute depth of coverage over `region` from `records`

    Parameters
    ----------
    region : |Region|
        Region over which to compute coverage

    records : iterable
        |AlignmentRecord| objects, typically those overlapping `region`

    filter_func : callable, optional
        Function that receives each record, and returns `True` if the record
        should be excluded, e.g. :func:`~regiontools.genomics.read_filters.filter_read`.
        If `None`, all records are counted.

    threshold : int, optional
        Depth threshold for `threshold_coverage_bases` (Default: 10)

    Returns
    -------
    |CoverageSummary|
    """
    if not isinstance(region,Region):
        region = Region.from_record(region)

    profile = numpy.zeros(len(region),dtype=int)
    read_count = 0
    for record in records:
        if filter_func is not None and filter_func(record):
            continue

        read_count += 1
        for block_start, block_length in get_blocks(record):
            left  = max(block_start,region.start)
            right = min(block_start + block_length - 1,region.end)
            if left <= right:
                profile[left - region.start:right - region.start + 1] += 1

    return CoverageSummary(region,read_count,profile,threshold=threshold)
