#!/usr/bin/env python
"""Predicates that decide whether read alignments should be excluded from
coverage calculations. Pass these as `filter_func` to
:func:`~regiontools.genomics.coverage.accumulate`.

Predicates accept |AlignmentRecord| objects as well as
:class:`pysam.AlignedSegment` objects from BAM files.
"""

FLAG_UNMAPPED     = 0x4
FLAG_SECONDARY    = 0x100
FLAG_QC_FAIL      = 0x200
FLAG_DUPLICATE    = 0x400

EXCLUDED_FLAGS = FLAG_UNMAPPED | FLAG_SECONDARY | FLAG_QC_FAIL | FLAG_DUPLICATE


def get_flag_and_mapq(read):
    """Return the SAM flag and mapping quality of `read`

    Parameters
    ----------
    read : |AlignmentRecord| or :class:`pysam.AlignedSegment`

    Returns
    -------
    tuple
        (`flag`, `mapq`)
    """
    if hasattr(read,"mapping_quality"):
        return read.flag, read.mapping_quality

    return read.flag, read.mapq

def filter_read(read):
    """Return `True` if `read` should be excluded from coverage, because it is
    a secondary alignment, failed quality checks, is unmapped, is a PCR or
    optical duplicate, or has a mapping quality of zero

    Parameters
    ----------
    read : |AlignmentRecord| or :class:`pysam.AlignedSegment`

    Returns
    -------
    bool
    """
    flag, mapq = get_flag_and_mapq(read)
    return flag & EXCLUDED_FLAGS != 0 or mapq == 0
