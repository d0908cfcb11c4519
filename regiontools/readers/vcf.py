#!/usr/bin/env python
"""Read `VCF`_ files into |VariantRecord| objects

The `VCF`_ header (meta-information lines beginning with `##`, and the column
header line beginning with `#CHROM`) is parsed into a |VCFHeader|, which lists
the INFO and FORMAT fields, samples, and contigs that the file declares.

Examples
--------
List samples, and iterate over variants::

    >>> with VCF_Reader("calls.vcf") as reader:
    >>>     print(reader.vcf_header.samples)
    >>>     for variant in reader:
    >>>         pass # do something with each variant
"""
import re
from collections import OrderedDict
from regiontools.readers.common import AbstractRecordReader
from regiontools.genomics.roitools import VariantRecord

_meta_pattern  = re.compile(r"^##(?P<key>[^=]+)=<(?P<body>.*)>\s*$")
_field_pattern = re.compile(r'(?P<key>[^=,]+)=(?P<value>"(?:[^"\\]|\\.)*"|[^,]*)')


def parse_meta_line(line):
    """Parse a structured `VCF`_ meta-information line, e.g.
    `##INFO=<ID=DP,Number=1,Type=Integer,Description="Depth">`

    Parameters
    ----------
    line : str
        Meta-information line

    Returns
    -------
    tuple
        Key (e.g. `'INFO'`) and an :class:`~collections.OrderedDict` of
        the fields within angle brackets, or (`None`, `None`) if the line
        is not structured
    """
    match = _meta_pattern.match(line)
    if match is None:
        return None, None

    fields = OrderedDict()
    for field in _field_pattern.finditer(match.group("body")):
        value = field.group("value")
        if value.startswith('"') and value.endswith('"'):
            value = value[1:-1]
        fields[field.group("key").strip()] = value

    return match.group("key"), fields


class VCFHeader(object):
    """Header of a `VCF`_ file

    Attributes
    ----------
    lines : list
        Raw header lines, without line endings

    info_ids : list
        IDs of INFO fields, in order of declaration

    format_ids : list
        IDs of FORMAT fields, in order of declaration

    samples : list
        Sample names, from the `#CHROM` line

    contigs : OrderedDict
        Contig names mapped to their lengths (`None` if not declared)
    """

    def __init__(self,lines):
        self.lines      = list(lines)
        self.info_ids   = []
        self.format_ids = []
        self.samples    = []
        self.contigs    = OrderedDict()

        for line in self.lines:
            if line.startswith("#CHROM"):
                self.samples = line.split("\t")[9:]
                continue

            key, fields = parse_meta_line(line)
            if key is None or "ID" not in fields:
                continue
            if key == "INFO":
                self.info_ids.append(fields["ID"])
            elif key == "FORMAT":
                self.format_ids.append(fields["ID"])
            elif key == "contig":
                length = fields.get("length")
                self.contigs[fields["ID"]] = int(length) if length and length.isdigit() else None

    def __str__(self):
        return "".join("%s\n" % X for X in self.lines)


class VCF_Reader(AbstractRecordReader):
    """Reads `VCF`_ files line by line into |VariantRecord| objects

    Parameters
    ----------
    filename : str
        Name of `VCF`_ file

    validate : bool, optional
        If `True`, raise |MalformedSourceError| as soon as unsorted variants
        are read (Default: `False`)

    printer : file-like, optional
        Logger implementing a ``write()`` method. Default: |NullWriter|

    Attributes
    ----------
    vcf_header : |VCFHeader|
        Parsed header
    """

    def is_header(self,line):
        return line.startswith("#")

    def parse_header(self,lines):
        self.vcf_header = VCFHeader(lines)

    def chroms(self):
        if len(self.vcf_header.contigs) == 0:
            return None

        return self.vcf_header.contigs

    def filter(self,line):
        return VariantRecord.from_vcf(line)
