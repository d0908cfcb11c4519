#!/usr/bin/env python
"""Small datasets and helper functions shared by unit and functional tests.

Test files are written to temporary directories, so that sidecar indexes
created by the tests never land in the source tree.
"""
import os
import shutil
import tempfile
import unittest

from regiontools.util.services.exceptions import reset_filters


#===============================================================================
# INDEX: file helpers
#===============================================================================

def write_text(dirname,name,text):
    """Write `text` to file `name` in `dirname`, and return its full path"""
    filename = os.path.join(dirname,name)
    with open(filename,"w") as fout:
        fout.write(text)

    return filename

def read_text(filename):
    with open(filename) as fh:
        return fh.read()

def brute_force_overlaps(records,region):
    """Return records in `records` that overlap `region`, found by checking each one"""
    return [X for X in records if X.contig == region.contig and X.start <= region.end and X.end >= region.start]

def record_keys(records):
    return [(X.contig,X.start,X.end) for X in records]


class TempDirTestCase(unittest.TestCase):
    """Test case that creates a fresh temporary directory for each test,
    and forgets `onceperfamily` warnings seen by earlier tests"""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp(prefix="regiontools_test_")
        reset_filters()

    def tearDown(self):
        shutil.rmtree(self.tmpdir,ignore_errors=True)

    def write(self,name,text):
        return write_text(self.tmpdir,name,text)

    def path(self,name):
        return os.path.join(self.tmpdir,name)



#===============================================================================
# INDEX: BED data
#===============================================================================

BED_TEXT = """track name=targets description="test targets"
chr1\t99\t109\tregion_a\t0\t+
chr1\t149\t160\tregion_b\t0\t+
chr1\t5000\t5100\tregion_c\t0\t-
chr2\t0\t50\tregion_d\t0\t+
chrM\t10\t20\tregion_e\t0\t+
"""



#===============================================================================
# INDEX: VCF data
#===============================================================================

VCF_HEADER = """##fileformat=VCFv4.2
##contig=<ID=chr1,length=10000>
##contig=<ID=chr2,length=5000>
##INFO=<ID=DP,Number=1,Type=Integer,Description="Total depth">
##INFO=<ID=DB,Number=0,Type=Flag,Description="dbSNP membership">
##INFO=<ID=AF,Number=A,Type=Float,Description="Allele frequency">
##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">
##FORMAT=<ID=DP,Number=1,Type=Integer,Description="Read depth">
##FORMAT=<ID=PL,Number=G,Type=Integer,Description="Phred-scaled genotype likelihoods">
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tsample1\tsample2
"""

VCF_RECORDS = [
    "chr1\t100\trs1\tA\tG\t50.0\tPASS\tDP=20;DB\tGT:DP:PL\t0/1:10:30,0,40\t1|1:10:60,20,0",
    "chr1\t105\t.\tAC\tA\t.\tlow_qual\tDP=5\tGT:DP\t./.:.\t0/0:5",
    "chr1\t155\trs2\tT\tC,G\t99.5\t.\tAF=0.1,0.2\tGT:DP\t1/2:30\t0/1:12",
    "chr1\t3000\t.\tG\tT\t20.0\tPASS\t.\tGT\t0/1\t0/0",
    "chr2\t10\trs3\tC\tT\t30.0\tPASS\tDB\tGT\t0/1\t0/1",
]

def vcf_text(records=None,header=VCF_HEADER):
    """Assemble a VCF file from header and data lines"""
    records = VCF_RECORDS if records is None else records
    return header + "".join("%s\n" % X for X in records)

def minimal_vcf_line(contig,pos,ref="A",alt="G",var_id="."):
    return "%s\t%s\t%s\t%s\t%s\t50\tPASS\t.\tGT\t0/1" % (contig,pos,var_id,ref,alt)



#===============================================================================
# INDEX: SAM data
#===============================================================================

SAM_HEADER = """@HD\tVN:1.6\tSO:coordinate
@SQ\tSN:chr1\tLN:10000
@SQ\tSN:chr2\tLN:5000
"""

def sam_line(name,contig,pos,cigar,flag=0,mapq=60):
    """Format a SAM alignment line with a placeholder sequence"""
    seq = "*"
    return "\t".join([name,str(flag),contig,str(pos),str(mapq),cigar,"*","0","0",seq,"*"])

def sam_text(lines,header=SAM_HEADER):
    return header + "".join("%s\n" % X for X in lines)

SAM_LINES = [
    # three reads covering chr1:100-104, one covering chr1:105-109, and
    # four reads excluded by read filters
    sam_line("read1","chr1",100,"5M"),
    sam_line("read2","chr1",100,"5M"),
    sam_line("read3","chr1",100,"5M"),
    sam_line("dup","chr1",100,"10M",flag=0x400),
    sam_line("secondary","chr1",101,"10M",flag=0x100),
    sam_line("qcfail","chr1",102,"10M",flag=0x200),
    sam_line("mapq0","chr1",103,"10M",mapq=0),
    sam_line("read4","chr1",105,"5M"),
    # spliced read, covering chr1:140-149 and chr1:160-169
    sam_line("spliced","chr1",140,"10M10N10M"),
    sam_line("read5","chr1",150,"3S20M2I5M"),
    sam_line("read6","chr2",5,"30M"),
]
