#!/usr/bin/env python
"""Read `BED`_ files into |BedFeature| objects

`BED`_ coordinates are 0-based and half-open. |BED_Reader| converts them to
1-based, closed coordinates, so that a `BED`_ line::

    chr1    99    110    my_region

yields a feature spanning positions 100 to 110 of chr1, inclusive.

`track` and `browser` declaration lines, comments, and blank lines are
skipped. Only the first six columns are read. Blocks (columns 10-12) are
ignored; each feature covers its whole span.

Examples
--------
Iterate over features in a sorted `BED`_ file::

    >>> with BED_Reader("targets.bed") as reader:
    >>>     for feature in reader:
    >>>         pass # do something with each feature
"""
from regiontools.readers.common import AbstractRecordReader
from regiontools.genomics.roitools import BedFeature

class BED_Reader(AbstractRecordReader):
    """Reads `BED`_ files line by line into |BedFeature| objects

    Parameters
    ----------
    filename : str
        Name of `BED`_ file

    validate : bool, optional
        If `True`, raise |MalformedSourceError| as soon as unsorted features
        are read (Default: `False`)

    printer : file-like, optional
        Logger implementing a ``write()`` method. Default: |NullWriter|
    """

    def is_comment(self,line):
        return line.startswith("#") or line.startswith("track") or line.startswith("browser")

    def filter(self,line):
        return BedFeature.from_bed(line)
