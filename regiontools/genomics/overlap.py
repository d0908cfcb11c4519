#!/usr/bin/env python
"""Filter one stream of records by whether they overlap records of an indexed
file. Used to select variants in target regions, and to subtract one variant
set from another.

Modes
-----
:data:`KEEP_IF_OVERLAP`
    Yield records that overlap at least one record of the indexed file

:data:`DROP_IF_OVERLAP`
    Yield records that overlap no record of the indexed file

Each input record is yielded at most once, in input order, however many
records of the indexed file it overlaps.
"""
from regiontools.genomics.roitools import Region
from regiontools.genomics.region_query import query

KEEP_IF_OVERLAP = "keep_if_overlap"
DROP_IF_OVERLAP = "drop_if_overlap"

OVERLAP_MODES = (KEEP_IF_OVERLAP,DROP_IF_OVERLAP)


def _check_mode(mode):
    if mode not in OVERLAP_MODES:
        raise ValueError("Unknown overlap mode '%s'. Expected one of: %s" % (mode,", ".join(OVERLAP_MODES)))

def _has_any(records):
    for _ in records:
        return True

    return False

def filter_by_overlap(records,index,source,mode):
    """Filter `records` by overlap with the records of an indexed file

    Parameters
    ----------
    records : iterable
        |Record| objects to filter

    index : |LinearIndex|
        Index of the file read by `source`

    source : |AbstractRecordReader|
        Seekable reader of the indexed file

    mode : str
        :data:`KEEP_IF_OVERLAP` or :data:`DROP_IF_OVERLAP`

    Yields
    ------
    |Record|
        Records of `records` that pass the filter

    Raises
    ------
    ValueError
        if `mode` is not recognized
    """
    _check_mode(mode)
    return _filter(records,lambda region: _has_any(query(index,source,region)),mode)

def _filter(records,has_overlap,mode):
    keep = mode == KEEP_IF_OVERLAP
    for record in records:
        if has_overlap(Region.from_record(record)) == keep:
            yield record


class OverlapFilter(object):
    """Filter records by overlap with any object providing `has_overlap(region)`,
    such as an |IndexedGenomeHash|

    Parameters
    ----------
    lookup : |AbstractGenomeHash|
        Object whose `has_overlap()` method reports whether a |Region| overlaps
        any of its records

    mode : str
        :data:`KEEP_IF_OVERLAP` or :data:`DROP_IF_OVERLAP`

    Examples
    --------
    Drop variants found in another file::

        >>> with IndexedGenomeHash("known.vcf",VCF_Reader) as known:
        >>>     novel = OverlapFilter(known,DROP_IF_OVERLAP)
        >>>     for variant in novel.filter(VCF_Reader("calls.vcf")):
        >>>         pass # do something
    """

    def __init__(self,lookup,mode):
        _check_mode(mode)
        self.lookup = lookup
        self.mode   = mode

    def __call__(self,record):
        """Return `True` if `record` passes the filter"""
        return self.lookup.has_overlap(Region.from_record(record)) == (self.mode == KEEP_IF_OVERLAP)

    def filter(self,records):
        """Yield records of `records` that pass the filter, in order"""
        return _filter(records,self.lookup.has_overlap,self.mode)
