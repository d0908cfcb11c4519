#!/usr/bin/env python
"""Read uncompressed `SAM`_ files into |AlignmentRecord| objects

Header lines (beginning with `@`) are kept in the reader's `header`, and
`@SQ` lines form the sequence dictionary returned by
:meth:`SAM_Reader.chroms`. Files must be sorted by coordinate to be indexed.
For `BAM`_ files, see |BAMGenomeHash|.
"""
from collections import OrderedDict
from regiontools.readers.common import AbstractRecordReader
from regiontools.genomics.roitools import AlignmentRecord

class SAM_Reader(AbstractRecordReader):
    """Reads `SAM`_ files line by line into |AlignmentRecord| objects

    Parameters
    ----------
    filename : str
        Name of `SAM`_ file

    validate : bool, optional
        If `True`, raise |MalformedSourceError| as soon as unsorted alignments
        are read (Default: `False`)

    printer : file-like, optional
        Logger implementing a ``write()`` method. Default: |NullWriter|
    """

    def is_header(self,line):
        return line.startswith("@")

    def is_comment(self,line):
        return line.startswith("@")

    def parse_header(self,lines):
        self.references = OrderedDict()
        for line in lines:
            if not line.startswith("@SQ"):
                continue

            tags = dict(X.split(":",1) for X in line.split("\t")[1:] if ":" in X)
            if "SN" in tags:
                length = tags.get("LN","")
                self.references[tags["SN"]] = int(length) if length.isdigit() else None

    def chroms(self):
        if len(self.references) == 0:
            return None

        return self.references

    def filter(self,line):
        return AlignmentRecord.from_sam(line)
