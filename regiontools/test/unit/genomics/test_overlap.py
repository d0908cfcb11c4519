#!/usr/bin/env python
"""Tests for overlap filtering and subtraction in :py:mod:`regiontools.genomics.overlap`
"""
from regiontools.test.common import TempDirTestCase, vcf_text, minimal_vcf_line, record_keys, BED_TEXT
from regiontools.readers.bed import BED_Reader
from regiontools.readers.vcf import VCF_Reader
from regiontools.genomics.roitools import VariantRecord, BedFeature
from regiontools.genomics.linear_index import build_index
from regiontools.genomics.genome_hash import IndexedGenomeHash
from regiontools.genomics.overlap import filter_by_overlap, OverlapFilter, KEEP_IF_OVERLAP,\
                                         DROP_IF_OVERLAP, OVERLAP_MODES


class TestFilterByOverlap(TempDirTestCase):

    def _subtract(self,lines_a,lines_b,mode=DROP_IF_OVERLAP):
        records = [VariantRecord.from_vcf(X) for X in lines_a]
        vcf_b = self.write("b.vcf",vcf_text(lines_b))
        with VCF_Reader(vcf_b) as reader:
            index = build_index(reader,bin_size=100)
            return list(filter_by_overlap(records,index,reader,mode))

    def test_subtract_identical_variant(self):
        found = self._subtract([minimal_vcf_line("chr1",500)],[minimal_vcf_line("chr1",500)])
        self.assertEqual(found,[])

    def test_subtract_variant_on_other_contig(self):
        line = minimal_vcf_line("chr1",500)
        found = self._subtract([line],[minimal_vcf_line("chr2",500)])
        self.assertEqual(len(found),1)
        self.assertEqual(found[0].line,line + "\n")

    def test_subtract_from_empty_file(self):
        found = self._subtract([minimal_vcf_line("chr1",500)],[])
        self.assertEqual(record_keys(found),[("chr1",500,500)])

    def test_overlap_by_reference_allele_span(self):
        # deletion at 498 spans 498-501, so it overlaps the SNV at 500
        lines_a = [minimal_vcf_line("chr1",500),minimal_vcf_line("chr1",502)]
        lines_b = [minimal_vcf_line("chr1",498,ref="ACGT",alt="A")]
        self.assertEqual(record_keys(self._subtract(lines_a,lines_b)),[("chr1",502,502)])
        self.assertEqual(record_keys(self._subtract(lines_a,lines_b,KEEP_IF_OVERLAP)),[("chr1",500,500)])

    def test_each_record_yielded_once_in_input_order(self):
        lines_a = [minimal_vcf_line("chr1",X) for X in (100,150,155,3000)]
        lines_b = [minimal_vcf_line("chr1",100),
                   minimal_vcf_line("chr1",100,alt="T"),
                   minimal_vcf_line("chr1",155),
                   minimal_vcf_line("chr1",155,alt="C")]
        found = self._subtract(lines_a,lines_b,KEEP_IF_OVERLAP)
        self.assertEqual(record_keys(found),[("chr1",100,100),("chr1",155,155)])

    def test_modes_are_complementary(self):
        lines_a = [minimal_vcf_line("chr1",X) for X in range(90,170,3)]
        lines_b = [minimal_vcf_line("chr1",X) for X in range(95,160,7)]
        kept    = self._subtract(lines_a,lines_b,KEEP_IF_OVERLAP)
        dropped = self._subtract(lines_a,lines_b,DROP_IF_OVERLAP)
        self.assertEqual(sorted(record_keys(kept) + record_keys(dropped)),
                         record_keys([VariantRecord.from_vcf(X) for X in lines_a]))

    def test_unknown_mode_raises_before_iteration(self):
        self.assertEqual(sorted(OVERLAP_MODES),sorted([KEEP_IF_OVERLAP,DROP_IF_OVERLAP]))
        self.assertRaises(ValueError,filter_by_overlap,[],None,None,"sometimes")


class TestOverlapFilter(TempDirTestCase):

    def setUp(self):
        TempDirTestCase.setUp(self)
        self.bed  = self.write("targets.bed",BED_TEXT)
        self.targets = IndexedGenomeHash(self.bed,BED_Reader)
        self.variants = [VariantRecord.from_vcf(X) for X in vcf_text().splitlines() if not X.startswith("#")]

    def tearDown(self):
        self.targets.close()
        TempDirTestCase.tearDown(self)

    def test_keep_variants_in_targets(self):
        keep = OverlapFilter(self.targets,KEEP_IF_OVERLAP)
        found = list(keep.filter(self.variants))
        self.assertEqual(record_keys(found),[("chr1",100,100),("chr1",105,106),("chr1",155,155),("chr2",10,10)])

    def test_drop_variants_in_targets(self):
        drop = OverlapFilter(self.targets,DROP_IF_OVERLAP)
        self.assertEqual(record_keys(drop.filter(self.variants)),[("chr1",3000,3000)])

    def test_call(self):
        keep = OverlapFilter(self.targets,KEEP_IF_OVERLAP)
        self.assertTrue(keep(BedFeature("chr1",109,120)))
        self.assertFalse(keep(BedFeature("chr1",110,120)))
        self.assertFalse(OverlapFilter(self.targets,DROP_IF_OVERLAP)(BedFeature("chr1",100,100)))

    def test_unknown_mode_raises(self):
        self.assertRaises(ValueError,OverlapFilter,self.targets,"keep")
