#!/usr/bin/env python
"""Linear indexes of sorted record files

A |LinearIndex| divides each contig of a sorted record file into bins of
equal width, and remembers, for each bin in which at least one record starts,
the file offset of the first record starting in that bin. To find records
overlapping a region, a reader seeks to the offset recorded for the bin
containing the region start (or the nearest preceding bin that has an entry),
and scans forward from there.

Records can be much longer than a bin, so a record that starts several bins
before a region may still overlap it. For each contig, the index therefore also
records the length of the longest record, and queries back up by that many
positions before choosing a bin. See :mod:`regiontools.genomics.region_query`.

Indexes are built in a single pass over a record source by :func:`build_index`,
and persisted to sidecar files by :mod:`regiontools.genomics.index_store`.
"""
import bisect
from collections import OrderedDict
from regiontools.util.services.exceptions import MalformedSourceError

DEFAULT_BIN_SIZE = 8000
"""Default width of index bins, in nucleotides"""


class ContigIndex(object):
    """Linear index of records on a single contig

    Attributes
    ----------
    name : str
        Contig name

    bins : list
        Sorted bin numbers that contain the start of at least one record

    offsets : list
        File offset of first record in each bin of `bins`

    record_count : int
        Number of records on contig

    min_bin, max_bin : int
        Lowest and highest bins of `bins`

    first_offset : int
        File offset of the first record on the contig

    longest_record : int
        Length, in nucleotides, of longest record on the contig
    """
    __slots__ = ("name","bins","offsets","record_count","first_offset","longest_record")

    def __init__(self,name,first_offset,bins=None,offsets=None,record_count=0,
                 longest_record=1):
        self.name           = name
        self.first_offset   = first_offset
        self.bins           = [] if bins is None else list(bins)
        self.offsets        = [] if offsets is None else list(offsets)
        self.record_count   = record_count
        self.longest_record = longest_record

    @property
    def min_bin(self):
        return self.bins[0] if len(self.bins) > 0 else 0

    @property
    def max_bin(self):
        return self.bins[-1] if len(self.bins) > 0 else 0

    def __repr__(self):
        return "<%s %s records=%s bins=%s-%s longest=%s>" % (self.__class__.__name__,
                                                            self.name,
                                                            self.record_count,
                                                            self.min_bin,
                                                            self.max_bin,
                                                            self.longest_record)

    def __eq__(self,other):
        return isinstance(other,ContigIndex) and\
               self.name == other.name and\
               self.first_offset == other.first_offset and\
               self.bins == other.bins and\
               self.offsets == other.offsets and\
               self.record_count == other.record_count and\
               self.longest_record == other.longest_record

    def __ne__(self,other):
        return not self == other

    __hash__ = None

    def add(self,bin_,offset,length):
        """Register a record with the index. Records must be added in sorted order

        Parameters
        ----------
        bin_ : int
            Bin in which record starts

        offset : int
            File offset of record

        length : int
            Length of record, in nucleotides
        """
        if len(self.bins) == 0 or bin_ > self.bins[-1]:
            self.bins.append(bin_)
            self.offsets.append(offset)

        self.record_count += 1
        if length > self.longest_record:
            self.longest_record = length

    def get_seek_offset(self,start_bin):
        """Return the offset of the first record in the highest indexed bin
        that is less than or equal to `start_bin`. If no such bin exists,
        the offset of the first record on the contig is returned.

        Parameters
        ----------
        start_bin : int
            Bin number

        Returns
        -------
        int
            File offset
        """
        idx = bisect.bisect_right(self.bins,start_bin) - 1
        if idx < 0:
            return self.first_offset

        return self.offsets[idx]


class LinearIndex(object):
    """Linear index of a sorted record file, mapping (contig, bin) pairs to
    file offsets

    Attributes
    ----------
    bin_size : int
        Width of bins, in nucleotides

    contigs : OrderedDict
        Dictionary mapping contig names to |ContigIndex| objects, in file order

    source_size : int
        Size of indexed file, in bytes, when the index was built (0 if unknown)

    source_mtime_ns : int
        Modification time of indexed file, in nanoseconds since the epoch,
        when the index was built (0 if unknown)
    """

    def __init__(self,bin_size=DEFAULT_BIN_SIZE,contigs=None,source_size=0,source_mtime_ns=0):
        if bin_size < 1:
            raise ValueError("Bin size must be a positive integer. Found %s." % bin_size)

        self.bin_size        = bin_size
        self.contigs         = OrderedDict() if contigs is None else contigs
        self.source_size     = source_size
        self.source_mtime_ns = source_mtime_ns

    def __repr__(self):
        return "<%s bin_size=%s contigs=%s records=%s>" % (self.__class__.__name__,
                                                          self.bin_size,
                                                          len(self),
                                                          self.record_count)

    def __eq__(self,other):
        return isinstance(other,LinearIndex) and\
               self.bin_size == other.bin_size and\
               self.source_size == other.source_size and\
               self.source_mtime_ns == other.source_mtime_ns and\
               list(self.contigs.items()) == list(other.contigs.items())

    def __ne__(self,other):
        return not self == other

    __hash__ = None

    def __contains__(self,contig):
        return contig in self.contigs

    def __len__(self):
        """Number of indexed contigs"""
        return len(self.contigs)

    def chroms(self):
        """Return names of indexed contigs, in file order

        Returns
        -------
        list
        """
        return list(self.contigs.keys())

    def get_contig(self,contig):
        """Return the |ContigIndex| for `contig`

        Raises
        ------
        KeyError
            if `contig` has no records in the index
        """
        return self.contigs[contig]

    @property
    def record_count(self):
        """Total number of records in the index"""
        return sum(X.record_count for X in self.contigs.values())

    def get_start_bin(self,region):
        """Return the bin from which a scan for records overlapping `region`
        must begin. The region start is moved left by the length of the longest
        record on its contig, so that long records starting in earlier bins
        are found.

        Parameters
        ----------
        region : |Region|

        Returns
        -------
        int or None
            Bin number, or `None` if `region.contig` is not in the index
        """
        if region.contig not in self.contigs:
            return None

        longest = self.contigs[region.contig].longest_record
        return max(region.start - longest + 1,1) // self.bin_size

    def get_seek_offset(self,region):
        """Return the file offset from which to scan for records overlapping `region`

        Parameters
        ----------
        region : |Region|

        Returns
        -------
        int or None
            File offset, or `None` if `region.contig` is not in the index
        """
        start_bin = self.get_start_bin(region)
        if start_bin is None:
            return None

        return self.contigs[region.contig].get_seek_offset(start_bin)


def build_index(source,bin_size=DEFAULT_BIN_SIZE,filename=None):
    """Build a |LinearIndex| in a single pass over a sorted record source

    Parameters
    ----------
    source : |AbstractRecordReader| or iterable
        Either a reader, which will be iterated from its first record, or an
        iterable of tuples of (`offset`, |Record|)

    bin_size : int, optional
        Width of index bins, in nucleotides (Default: |DEFAULT_BIN_SIZE|)

    filename : str, optional
        Name of source file, used in error messages. If `None`, taken from
        `source` if it has a `filename` attribute

    Returns
    -------
    |LinearIndex|

    Raises
    ------
    ValueError
        if `bin_size` is less than 1

    |MalformedSourceError|
        if records are not sorted by contig, then by start position
    """
    index = LinearIndex(bin_size=bin_size)
    if filename is None:
        filename = getattr(source,"filename","<record source>")

    if hasattr(source,"iter_with_offsets"):
        source = source.iter_with_offsets()

    contigs   = index.contigs
    current   = None
    last      = None
    for offset, record in source:
        if current is None or record.contig != current.name:
            if record.contig in contigs:
                raise MalformedSourceError(filename,
                        "Records on contig '%s' resume at position %s after records on contig '%s'. File must be sorted by contig, then by start position." % (record.contig,record.start,current.name))

            current = contigs[record.contig] = ContigIndex(record.contig,offset)
        elif record.start < last.start:
            raise MalformedSourceError(filename,
                    "Record at %s:%s follows record at %s:%s. File must be sorted by contig, then by start position." % (record.contig,record.start,last.contig,last.start))

        current.add(record.start // bin_size,offset,max(record.end - record.start + 1,1))
        last = record

    return index
