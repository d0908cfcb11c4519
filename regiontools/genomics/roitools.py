#!/usr/bin/env python
"""This module defines object types that describe regions of interest in a
genome, and the records read from sorted genomic files.

All coordinates in this module are **1-based and closed** (both `start` and
`end` are included), as in `VCF`_, `SAM`_, and most genome browsers. Readers
convert other conventions (e.g. 0-based, half-open `BED`_ coordinates) when
records are parsed.

Important classes
-----------------
|Region|
    An immutable query key, specified by a contig name, a start, and an end
    coordinate. Regions are used to ask indexes which records overlap them.

|Record|
    Base class for a single entry of a sorted genomic file. The indexing and
    query layers only ever look at `contig`, `start`, and `end`; everything
    else a record carries is payload for the tool that consumes it.

|BedFeature|, |VariantRecord|, |AlignmentRecord|
    Records parsed from `BED`_, `VCF`_, and `SAM`_ lines, respectively.
"""
import re
from collections import namedtuple, OrderedDict


#===============================================================================
# INDEX: helper functions
#===============================================================================

cigar_pattern = re.compile(r"(\d+)([MIDNSHP=X])")
"""Matches one operation of a CIGAR string"""

_REF_CONSUMING   = frozenset("MDN=X")
_ALIGNED         = frozenset("M=X")

def parse_cigar(cigar):
    """Split a CIGAR string into a list of operations

    Parameters
    ----------
    cigar : str
        CIGAR string, e.g. `'10M200N15M'`

    Returns
    -------
    list
        list of tuples of (`length`, `operation`)

    Raises
    ------
    ValueError
        if `cigar` is not a valid CIGAR string
    """
    ops = [(int(length),op) for length,op in cigar_pattern.findall(cigar)]
    if "".join("%s%s" % X for X in ops) != cigar:
        raise ValueError("Malformed CIGAR string '%s'" % cigar)

    return ops

def get_alignment_blocks(start,cigar):
    """Determine the blocks of reference positions covered by aligned bases of a read

    Match (`M`), sequence match (`=`), and mismatch (`X`) operations form blocks.
    Deletions (`D`) and skipped regions (`N`, e.g. introns) advance the reference
    position and separate blocks. Insertions, clipping and padding do not touch
    the reference.

    Parameters
    ----------
    start : int
        1-based reference position of first aligned base

    cigar : str
        CIGAR string

    Returns
    -------
    list
        list of tuples of (`reference_start`, `length`), 1-based

    int
        Number of reference positions spanned by alignment
    """
    blocks = []
    ref_pos = start
    block_start = None
    for length, op in parse_cigar(cigar):
        if op in _ALIGNED:
            if block_start is None:
                block_start = ref_pos
            ref_pos += length
        else:
            if block_start is not None:
                blocks.append((block_start,ref_pos - block_start))
                block_start = None
            if op in _REF_CONSUMING:
                ref_pos += length

    if block_start is not None:
        blocks.append((block_start,ref_pos - block_start))

    return blocks, ref_pos - start



#===============================================================================
# INDEX: Regions
#===============================================================================

region_pattern = re.compile(r"^([^:]+):([0-9,]+)-([0-9,]+)$")

class Region(namedtuple("Region",["contig","start","end"])):
    """An immutable region of a contig, used as a query key

    Attributes
    ----------
    contig : str
        Name of contig (e.g. chromosome)

    start : int
        1-based, leftmost position of region

    end : int
        1-based, rightmost position of region (included in region). Must be >= `start`
    """
    __slots__ = ()

    def __new__(cls,contig,start,end):
        start = int(start)
        end   = int(end)
        if start > end:
            raise ValueError("Region start (%s) must not exceed its end (%s)" % (start,end))

        return super(Region,cls).__new__(cls,contig,start,end)

    def __str__(self):
        return "%s:%s-%s" % (self.contig,self.start,self.end)

    def __len__(self):
        """Return length, in nucleotides, of |Region|"""
        return self.end - self.start + 1

    @staticmethod
    def from_str(inp):
        """Construct a |Region| from a string of form `contig:start-end`

        Parameters
        ----------
        inp : str
            Region, e.g. `'chr1:100-200'`. Thousands separators are allowed.

        Returns
        -------
        |Region|
        """
        match = region_pattern.search(inp.strip())
        if match is None:
            raise ValueError("Could not parse region from '%s'" % inp)

        contig, start, end = match.groups()
        return Region(contig,start.replace(",",""),end.replace(",",""))

    @staticmethod
    def from_record(record):
        """Construct the |Region| spanned by `record`. Records whose end precedes
        their start (e.g. zero-length `BED`_ intervals) are treated as covering
        their start position.

        Parameters
        ----------
        record : |Record|

        Returns
        -------
        |Region|
        """
        return Region(record.contig,record.start,max(record.start,record.end))

    def overlaps(self,other):
        """Test whether `other` shares a contig and at least one position with this region

        Parameters
        ----------
        other : |Region| or |Record|

        Returns
        -------
        bool
        """
        return self.contig == other.contig and\
               other.start <= self.end and\
               other.end >= self.start



#===============================================================================
# INDEX: Records
#===============================================================================

class Record(object):
    """A single entry of a sorted genomic file

    Attributes
    ----------
    contig : str
        Name of contig

    start : int
        1-based, leftmost position of record

    end : int
        1-based, rightmost position of record (inclusive)
    """
    __slots__ = ("contig","start","end")

    def __init__(self,contig,start,end):
        self.contig = contig
        self.start  = start
        self.end    = end

    def __repr__(self):
        return "<%s %s:%s-%s>" % (self.__class__.__name__,self.contig,self.start,self.end)

    def __eq__(self,other):
        return isinstance(other,Record) and\
               self.__class__ == other.__class__ and\
               self.contig == other.contig and\
               self.start == other.start and\
               self.end == other.end and\
               self._payload() == other._payload()

    def __ne__(self,other):
        return not self == other

    __hash__ = None

    def _payload(self):
        return ()

    @property
    def length(self):
        """Number of positions between `start` and `end`, inclusive"""
        return self.end - self.start + 1


class BedFeature(Record):
    """A feature read from a `BED`_ file

    Attributes
    ----------
    name : str or None
        Feature name (fourth column), if present

    score : str or None
        Score column, if present

    strand : str
        Strand (`'+'`, `'-'`, or `'.'`)
    """
    __slots__ = ("name","score","strand")

    def __init__(self,contig,start,end,name=None,score=None,strand="."):
        Record.__init__(self,contig,start,end)
        self.name   = name
        self.score  = score
        self.strand = strand

    def _payload(self):
        return (self.name,self.score,self.strand)

    @staticmethod
    def from_bed(line):
        """Parse a |BedFeature| from a `BED`_ line. `BED`_ start coordinates are
        0-based, and end coordinates half-open, so the 1-based, closed
        coordinates of the feature are `chromStart + 1` and `chromEnd`

        Parameters
        ----------
        line : str
            Line of a `BED`_ file

        Returns
        -------
        |BedFeature|
        """
        items = line.rstrip("\r\n").split("\t")
        if len(items) < 3:
            items = line.split()
        if len(items) < 3:
            raise ValueError("BED lines require at least three columns")

        name   = items[3] if len(items) > 3 else None
        score  = items[4] if len(items) > 4 else None
        strand = items[5] if len(items) > 5 else "."
        return BedFeature(items[0],int(items[1]) + 1,int(items[2]),name=name,score=score,strand=strand)

    def as_bed(self):
        """Format feature as a six-column `BED`_ line

        Returns
        -------
        str
        """
        ltmp = [self.contig,
                str(self.start - 1),
                str(self.end),
                "." if self.name is None else self.name,
                "0" if self.score is None else self.score,
                self.strand]
        return "\t".join(ltmp) + "\n"


class VariantRecord(Record):
    """A variant read from a `VCF`_ file

    Attributes
    ----------
    id : str
        Variant ID, or `'.'`

    ref : str
        Reference allele

    alt : list
        Alternate alleles

    qual : float or None
        Phred-scaled quality, if given

    filters : list
        Filters. `['PASS']` for passing variants, `[]` if filters were not applied

    info : OrderedDict
        INFO fields. Flags map to `True`

    format : list
        Keys of per-sample fields (e.g. `['GT','DP']`)

    samples : list
        Per-sample values, as lists matching `format`

    line : str
        Raw text of the record, including its newline
    """
    __slots__ = ("id","ref","alt","qual","filters","info","format","samples","line")

    def __init__(self,contig,start,end,id=".",ref="N",alt=None,qual=None,
                 filters=None,info=None,format=None,samples=None,line=None):
        Record.__init__(self,contig,start,end)
        self.id      = id
        self.ref     = ref
        self.alt     = [] if alt is None else alt
        self.qual    = qual
        self.filters = [] if filters is None else filters
        self.info    = OrderedDict() if info is None else info
        self.format  = [] if format is None else format
        self.samples = [] if samples is None else samples
        self.line    = line

    def _payload(self):
        return (self.id,self.ref,tuple(self.alt))

    @staticmethod
    def from_vcf(line):
        """Parse a |VariantRecord| from a `VCF`_ data line. The end coordinate
        is given by the `END` INFO field if present (e.g. for symbolic alleles),
        or else by the length of the reference allele.

        Parameters
        ----------
        line : str
            Line of a `VCF`_ file

        Returns
        -------
        |VariantRecord|
        """
        items = line.rstrip("\r\n").split("\t")
        if len(items) < 8:
            raise ValueError("VCF data lines require at least eight columns. Found %s." % len(items))

        chrom, pos, var_id, ref, alt, qual, filters, info = items[:8]
        pos = int(pos)

        info_dict = OrderedDict()
        if info not in (".",""):
            for item in info.split(";"):
                if "=" in item:
                    k, v = item.split("=",1)
                    info_dict[k] = v
                else:
                    info_dict[item] = True

        if "END" in info_dict and info_dict["END"] is not True:
            end = int(info_dict["END"])
        else:
            end = pos + len(ref) - 1

        fmt     = items[8].split(":") if len(items) > 8 else []
        samples = [X.split(":") for X in items[9:]]

        return VariantRecord(chrom,pos,end,
                             id      = var_id,
                             ref     = ref,
                             alt     = [] if alt == "." else alt.split(","),
                             qual    = None if qual == "." else float(qual),
                             filters = [] if filters == "." else filters.split(";"),
                             info    = info_dict,
                             format  = fmt,
                             samples = samples,
                             line    = line if line.endswith("\n") else line + "\n")


class AlignmentRecord(Record):
    """A read alignment, e.g. from a `SAM`_ file

    Attributes
    ----------
    name : str
        Read name

    flag : int
        Bitwise SAM flag

    mapq : int
        Mapping quality

    cigar : str
        CIGAR string, or `'*'`

    blocks : list
        Contiguous aligned blocks, as tuples of (`reference_start`, `length`)
        in 1-based coordinates
    """
    __slots__ = ("name","flag","mapq","cigar","blocks")

    def __init__(self,contig,start,end,name="",flag=0,mapq=255,cigar="*",blocks=None):
        Record.__init__(self,contig,start,end)
        self.name   = name
        self.flag   = flag
        self.mapq   = mapq
        self.cigar  = cigar
        self.blocks = [] if blocks is None else blocks

    def _payload(self):
        return (self.name,self.flag,self.mapq,self.cigar)

    @staticmethod
    def from_sam(line):
        """Parse an |AlignmentRecord| from a `SAM`_ alignment line

        Parameters
        ----------
        line : str
            Line of a `SAM`_ file

        Returns
        -------
        |AlignmentRecord|
        """
        items = line.rstrip("\r\n").split("\t")
        if len(items) < 11:
            raise ValueError("SAM alignment lines require at least eleven columns. Found %s." % len(items))

        name, flag, contig, pos, mapq, cigar = items[:6]
        start = int(pos)
        if cigar == "*":
            blocks, span = [], 1
        else:
            blocks, span = get_alignment_blocks(start,cigar)

        return AlignmentRecord(contig,start,start + max(span,1) - 1,
                               name   = name,
                               flag   = int(flag),
                               mapq   = int(mapq),
                               cigar  = cigar,
                               blocks = blocks)

    @staticmethod
    def from_aligned_segment(read):
        """Convert a :class:`pysam.AlignedSegment` to an |AlignmentRecord|

        Parameters
        ----------
        read : :class:`pysam.AlignedSegment`

        Returns
        -------
        |AlignmentRecord|
        """
        start  = read.reference_start + 1
        end    = read.reference_end if read.reference_end is not None else start
        blocks = [(X[0] + 1,X[1] - X[0]) for X in read.get_blocks()]
        return AlignmentRecord(read.reference_name,start,end,
                               name   = read.query_name,
                               flag   = read.flag,
                               mapq   = read.mapping_quality,
                               cigar  = read.cigarstring or "*",
                               blocks = blocks)
