"""This module contains tools for lookup of records in a region of interest within a genome.

.. contents::
   :local:

Summary
-------

It is frequently useful to retrieve records that overlap specific regions
of interest in the genome. ``GenomeHashes`` answer these queries from sorted
files on disk, reading only the part of each file near the region.


Module contents
---------------

Two implementations are provided, depending how the data are formatted:

======================    =========================================================
**Implementation**        **Format of record data**
----------------------    ---------------------------------------------------------
|IndexedGenomeHash|       Sorted `BED`_, `VCF`_, or `SAM`_ files, indexed by a
                          sidecar file that is built on first use

|BAMGenomeHash|           Sorted `BAM`_ files, indexed by a `.bai` file
======================    =========================================================


Examples
--------
Create an |IndexedGenomeHash|, and find records overlapping a region::

    >>> from regiontools import *
    >>> vcf_hash = IndexedGenomeHash("calls.vcf",VCF_Reader)
    >>> overlapping = vcf_hash[Region("chr1",100,200)]
    >>> overlapping
    [ list of VariantRecords ]

    # records can also be keys
    >>> bed_hash = IndexedGenomeHash("targets.bed",BED_Reader)
    >>> vcf_hash.has_overlap(next(iter(BED_Reader("targets.bed"))))
    True

Hashes hold open files. Close them when done, or use them as context managers::

    >>> with BAMGenomeHash("reads.bam") as bam_hash:
    >>>     reads = bam_hash[Region("chr1",100,200)]
"""
from collections import OrderedDict
from abc import abstractmethod

from regiontools.util.io.openers import NullWriter
from regiontools.genomics.roitools import Region, Record, AlignmentRecord
from regiontools.genomics.linear_index import DEFAULT_BIN_SIZE
from regiontools.genomics.index_store import load_or_build
from regiontools.genomics.region_query import query


def _as_region(roi):
    if isinstance(roi,Region):
        return roi
    elif isinstance(roi,Record):
        return Region.from_record(roi)
    elif isinstance(roi,str):
        return Region.from_str(roi)

    raise TypeError("Query must be a Region, a Record, or a string of form 'contig:start-end'. Found %s" % type(roi))


class AbstractGenomeHash(object):
    """Abstract base class for objects that find records overlapping a
    region of interest, allowing quick lookup for comparisons of overlap
    """

    @abstractmethod
    def iter_overlapping_features(self,roi):
        """Iterate over records that overlap `roi`, in file order

        Parameters
        ----------
        roi : |Region|, |Record|, or str
            Query region. Strings must be of form `'contig:start-end'`

        Yields
        ------
        |Record|
            Overlapping records
        """
        pass

    @abstractmethod
    def chroms(self):
        """Return the contigs known to the hash

        Returns
        -------
        OrderedDict
            Dictionary mapping contig names to their lengths, or to `None`
            where lengths are not known
        """
        pass

    def get_overlapping_features(self,roi):
        """Return list of records that overlap `roi`

        Parameters
        ----------
        roi : |Region|, |Record|, or str
            Query region. Strings must be of form `'contig:start-end'`

        Returns
        -------
        list
            Overlapping records, in file order

        Raises
        ------
        TypeError
            if `roi` is not a |Region|, |Record|, or str
        """
        return list(self.iter_overlapping_features(roi))

    def __getitem__(self,roi):
        """Return list of records that overlap `roi`. See :meth:`get_overlapping_features`"""
        return self.get_overlapping_features(roi)

    def has_overlap(self,roi):
        """Return `True` if at least one record overlaps `roi`

        Parameters
        ----------
        roi : |Region|, |Record|, or str
            Query region

        Returns
        -------
        bool
        """
        for _ in self.iter_overlapping_features(roi):
            return True

        return False

    def close(self):
        """Close underlying files"""
        pass

    def __enter__(self):
        return self

    def __exit__(self,exc_type,exc_value,traceback):
        self.close()


class IndexedGenomeHash(AbstractGenomeHash):
    """Find records overlapping query regions in sorted text files, using a
    sidecar |LinearIndex| that is built the first time the file is opened

    Parameters
    ----------
    filename : str
        Name of sorted record file

    reader_class : class
        Subclass of |AbstractRecordReader| that parses `filename`, e.g.
        |BED_Reader|, |VCF_Reader|, or |SAM_Reader|

    bin_size : int, optional
        Bin width for newly built indexes (Default: |DEFAULT_BIN_SIZE|)

    rebuild : bool, optional
        If `True`, rebuild the sidecar index even if it exists (Default: `False`)

    check_freshness : bool, optional
        If `True`, rebuild a sidecar index that no longer matches the size or
        modification time of `filename` (Default: `False`)

    validate : bool, optional
        If `True`, check sort order of every record read (Default: `False`)

    printer : file-like, optional
        Logger implementing a ``write()`` method. Default: |NullWriter|

    Attributes
    ----------
    filename : str
        Name of record file

    reader : |AbstractRecordReader|
        Open reader of `filename`

    index : |LinearIndex|
        Index of `filename`

    Raises
    ------
    |MalformedSourceError|
        if the index must be built, and `filename` is not sorted
    """

    def __init__(self,filename,reader_class,bin_size=DEFAULT_BIN_SIZE,rebuild=False,
                 check_freshness=False,validate=False,printer=None):
        self.filename = filename
        self.printer  = NullWriter() if printer is None else printer
        self.reader   = reader_class(filename,validate=validate,printer=self.printer)
        try:
            self.index = load_or_build(filename,self.reader,
                                       bin_size=bin_size,
                                       rebuild=rebuild,
                                       check_freshness=check_freshness,
                                       printer=self.printer)
        except Exception:
            self.reader.close()
            raise

    def __repr__(self):
        return "<%s '%s' contigs=%s>" % (self.__class__.__name__,self.filename,len(self.index))

    def __str__(self):
        return repr(self)

    def chroms(self):
        chroms = self.reader.chroms()
        if chroms is None:
            chroms = OrderedDict((X,None) for X in self.index.chroms())

        return chroms

    def iter_overlapping_features(self,roi):
        return query(self.index,self.reader,_as_region(roi))

    def close(self):
        self.reader.close()


class BAMGenomeHash(AbstractGenomeHash):
    """Find read alignments overlapping query regions in a sorted,
    indexed `BAM`_ file

    Parameters
    ----------
    filename : str
        Name of `BAM`_ file. A `.bai` index must exist alongside it.

    Attributes
    ----------
    bamfile : :class:`pysam.AlignmentFile`
        Open `BAM`_ file

    Raises
    ------
    IOError
        if `filename` has no `.bai` index
    """

    def __init__(self,filename):
        import pysam
        self.filename = filename
        self.bamfile  = pysam.AlignmentFile(filename,"rb")
        if not self.bamfile.has_index():
            self.bamfile.close()
            raise IOError("BAM file '%s' must be sorted and indexed. Index it with 'samtools index %s'." % (filename,filename))

    def __repr__(self):
        return "<%s '%s' contigs=%s>" % (self.__class__.__name__,self.filename,self.bamfile.nreferences)

    def chroms(self):
        return OrderedDict(zip(self.bamfile.references,self.bamfile.lengths))

    def iter_overlapping_features(self,roi):
        region = _as_region(roi)
        if region.contig not in self.bamfile.references:
            return

        for read in self.bamfile.fetch(region.contig,region.start - 1,region.end):
            yield AlignmentRecord.from_aligned_segment(read)

    def close(self):
        self.bamfile.close()
