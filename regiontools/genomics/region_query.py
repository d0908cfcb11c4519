#!/usr/bin/env python
"""Find records overlapping a |Region|, using a |LinearIndex| to seek into
a sorted record file.

A query seeks the reader to the offset chosen by the index, then scans forward:

  - records on a different contig end the scan
  - records ending before the region are skipped
  - the first record starting after the region ends the scan
  - every other record overlaps the region, and is yielded

Because the scan stops at the first record starting after the region, queries
are only complete if records are sorted by contig, then by start position.
A record that starts before the one scanned just before it raises a
|MalformedSourceError|.
"""
from regiontools.util.services.exceptions import MalformedSourceError


def query(index,source,region):
    """Yield records from `source` that overlap `region`, in file order

    Parameters
    ----------
    index : |LinearIndex|
        Index of the file read by `source`

    source : |AbstractRecordReader|
        Reader supporting `seek()` and iteration from the current position

    region : |Region|
        Query region

    Yields
    ------
    |Record|
        Records overlapping `region`. Each is yielded once.

    Raises
    ------
    |MalformedSourceError|
        if a record starts before the record scanned just before it
    """
    offset = index.get_seek_offset(region)
    if offset is None:
        return

    source.seek(offset)
    last_start = None
    for record in source:
        if record.contig != region.contig:
            break

        if last_start is not None and record.start < last_start:
            raise MalformedSourceError(getattr(source,"filename","<record source>"),
                    "Record at %s:%s follows record starting at %s. File must be sorted by contig, then by start position." % (record.contig,record.start,last_start))

        last_start = record.start
        if record.start > region.end:
            break

        if record.end < region.start:
            continue

        yield record

def count(index,source,region):
    """Count records in `source` that overlap `region`

    Parameters
    ----------
    index : |LinearIndex|

    source : |AbstractRecordReader|

    region : |Region|

    Returns
    -------
    int
    """
    return sum(1 for _ in query(index,source,region))
