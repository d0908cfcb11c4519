#!/usr/bin/env python
"""Tests for :py:mod:`regiontools.genomics.linear_index`
"""
import unittest

from regiontools.genomics.roitools import Region, Record
from regiontools.genomics.linear_index import LinearIndex, ContigIndex, build_index, DEFAULT_BIN_SIZE
from regiontools.util.services.exceptions import MalformedSourceError


def with_offsets(records,width=10):
    """Pair records with fake, increasing file offsets"""
    return [(i*width,X) for i,X in enumerate(records)]


class TestContigIndex(unittest.TestCase):

    def setUp(self):
        self.contig = ContigIndex("chr1",50)
        for bin_, offset, length in [(0,50,10),(0,60,30),(3,70,5),(7,80,100),(7,90,2)]:
            self.contig.add(bin_,offset,length)

    def test_only_first_offset_of_each_bin_kept(self):
        self.assertEqual(self.contig.bins,[0,3,7])
        self.assertEqual(self.contig.offsets,[50,70,80])

    def test_counts_and_lengths(self):
        self.assertEqual(self.contig.record_count,5)
        self.assertEqual(self.contig.longest_record,100)
        self.assertEqual(self.contig.min_bin,0)
        self.assertEqual(self.contig.max_bin,7)

    def test_seek_offset_uses_nearest_preceding_bin(self):
        tests = [(0,50),(1,50),(3,70),(5,70),(7,80),(100,80)]
        for start_bin, expected in tests:
            self.assertEqual(self.contig.get_seek_offset(start_bin),expected,
                             msg="Wrong offset for bin %s" % start_bin)

    def test_seek_offset_before_first_bin(self):
        contig = ContigIndex("chr1",500)
        contig.add(4,500,1)
        self.assertEqual(contig.get_seek_offset(2),500)


class TestBuildIndex(unittest.TestCase):

    def setUp(self):
        self.records = [Record("chr1",5,20),
                        Record("chr1",50,60),
                        Record("chr1",120,400),
                        Record("chr1",130,131),
                        Record("chr1",1000,1000),
                        Record("chr2",1,5),
                        Record("chr2",250,260),
                       ]

    def test_bin_size_must_be_positive(self):
        self.assertRaises(ValueError,build_index,with_offsets(self.records),bin_size=0)
        self.assertRaises(ValueError,LinearIndex,-5)

    def test_default_bin_size(self):
        self.assertEqual(build_index(with_offsets(self.records)).bin_size,DEFAULT_BIN_SIZE)

    def test_contigs_in_file_order(self):
        index = build_index(with_offsets(self.records),bin_size=100)
        self.assertEqual(index.chroms(),["chr1","chr2"])
        self.assertEqual(len(index),2)
        self.assertTrue("chr2" in index)
        self.assertFalse("chr3" in index)

    def test_bins_and_offsets(self):
        index = build_index(with_offsets(self.records),bin_size=100)
        chr1 = index.get_contig("chr1")
        self.assertEqual(chr1.bins,[0,1,10])
        self.assertEqual(chr1.offsets,[0,20,40])
        self.assertEqual(chr1.first_offset,0)
        self.assertEqual(chr1.record_count,5)
        self.assertEqual(chr1.longest_record,281)

        chr2 = index.get_contig("chr2")
        self.assertEqual(chr2.bins,[0,2])
        self.assertEqual(chr2.offsets,[50,60])
        self.assertEqual(chr2.first_offset,50)
        self.assertEqual(index.record_count,7)

    def test_zero_length_record_counts_as_one_position(self):
        index = build_index(with_offsets([Record("chr1",11,10)]),bin_size=10)
        self.assertEqual(index.get_contig("chr1").longest_record,1)

    def test_idempotent(self):
        self.assertEqual(build_index(with_offsets(self.records),bin_size=64),
                         build_index(with_offsets(self.records),bin_size=64))
        self.assertNotEqual(build_index(with_offsets(self.records),bin_size=64),
                            build_index(with_offsets(self.records),bin_size=65))

    def test_unsorted_starts_raise(self):
        records = [Record("chr1",50,60),Record("chr1",10,20)]
        self.assertRaises(MalformedSourceError,build_index,with_offsets(records))

    def test_resumed_contig_raises(self):
        records = [Record("chr1",5,10),Record("chr2",5,10),Record("chr1",50,60)]
        self.assertRaises(MalformedSourceError,build_index,with_offsets(records))

    def test_equal_starts_allowed(self):
        records = [Record("chr1",5,10),Record("chr1",5,100),Record("chr1",5,7)]
        index = build_index(with_offsets(records),bin_size=10)
        self.assertEqual(index.get_contig("chr1").record_count,3)

    def test_empty_source(self):
        index = build_index([],bin_size=10)
        self.assertEqual(len(index),0)
        self.assertEqual(index.record_count,0)


class TestSeekOffset(unittest.TestCase):

    def setUp(self):
        records = [Record("chr1",5,20),
                   Record("chr1",250,260),
                   Record("chr1",510,520),
                   Record("chr1",1020,1030),
                  ]
        self.index = build_index(with_offsets(records),bin_size=100)

    def test_absent_contig(self):
        self.assertIsNone(self.index.get_start_bin(Region("chrX",1,10)))
        self.assertIsNone(self.index.get_seek_offset(Region("chrX",1,10)))

    def test_start_bin_backs_up_by_longest_record(self):
        # longest record on chr1 spans 16 positions
        self.assertEqual(self.index.get_start_bin(Region("chr1",515,600)),(515 - 16 + 1)//100)
        self.assertEqual(self.index.get_start_bin(Region("chr1",1,2)),0)

    def test_seek_offsets(self):
        tests = [(Region("chr1",1,10),0),
                 (Region("chr1",300,400),10),
                 (Region("chr1",515,600),20),
                 (Region("chr1",900,950),20),
                 (Region("chr1",5000,6000),30),
                ]
        for region, expected in tests:
            self.assertEqual(self.index.get_seek_offset(region),expected,
                             msg="Wrong seek offset for %s" % str(region))


if __name__ == "__main__":
    unittest.main()
