#!/usr/bin/env python
"""Functional tests of :py:mod:`regiontools.bin.select_variants`"""
import io

from regiontools.test.common import TempDirTestCase, BED_TEXT, VCF_HEADER, VCF_RECORDS,\
                                    vcf_text, minimal_vcf_line, read_text
from regiontools.util.io.openers import read_pl_table
from regiontools.util.services.decorators import catch_stderr
from regiontools.bin.select_variants import main


class TestSelectVariants(TempDirTestCase):

    def setUp(self):
        TempDirTestCase.setUp(self)
        self.bed = self.write("targets.bed",BED_TEXT)
        self.vcf = self.write("calls.vcf",vcf_text())
        self.outfile = self.path("selected.vcf")
        self.summary = self.path("summary.txt")
        self.log = io.StringIO()
        self.main = catch_stderr(self.log)(main)

    def test_variants_in_targets(self):
        self.main([self.vcf,self.bed,self.outfile,self.summary])
        expected = vcf_text([VCF_RECORDS[X] for X in (0,1,2,4)])
        self.assertEqual(read_text(self.outfile),expected)

    def test_summary(self):
        self.main([self.vcf,self.bed,self.outfile,self.summary])
        df = read_pl_table(self.summary,comment=None)
        self.assertEqual(list(df.columns),["#name","variant_count"])
        self.assertEqual(list(df["#name"]),["region_a","region_b","region_c","region_d","region_e"])
        self.assertEqual(list(df["variant_count"]),[2,1,0,1,0])
        self.assertTrue("We saw 5 record(s) in file %s" % self.bed in self.log.getvalue())

    def test_exclude(self):
        known = self.write("known.vcf",vcf_text([minimal_vcf_line("chr1",100),
                                                 minimal_vcf_line("chr2",8,ref="CCCC",alt="C")]))
        self.main(["--exclude",known,self.vcf,self.bed,self.outfile])
        self.assertEqual(read_text(self.outfile),vcf_text([VCF_RECORDS[1],VCF_RECORDS[2]]))

    def test_variant_overlapping_two_targets_written_once(self):
        bed = self.write("overlapping.bed","chr1\t90\t105\tfirst\nchr1\t95\t120\tsecond\n")
        self.main([self.vcf,bed,self.outfile,self.summary])
        self.assertEqual(read_text(self.outfile),vcf_text(VCF_RECORDS[:2]))
        df = read_pl_table(self.summary,comment=None)
        self.assertEqual(list(df["variant_count"]),[2,2])

    def test_output_to_log(self):
        self.main([self.vcf,self.bed])
        self.assertTrue(VCF_HEADER.splitlines()[-1] in self.log.getvalue())
        self.assertTrue("rs2" in self.log.getvalue())

    def test_missing_arguments_exit_1(self):
        with self.assertRaises(SystemExit) as ctx:
            self.main([self.vcf])

        self.assertEqual(ctx.exception.code,1)
