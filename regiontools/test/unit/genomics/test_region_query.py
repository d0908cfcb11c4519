#!/usr/bin/env python
"""Tests for region queries in :py:mod:`regiontools.genomics.region_query`.

Query results are checked against a brute-force scan of all records, for
several bin sizes, so that both completeness (no overlapping record is missed)
and soundness (no other record is returned) are tested.
"""
import numpy

from regiontools.test.common import TempDirTestCase, brute_force_overlaps, record_keys
from regiontools.readers.bed import BED_Reader
from regiontools.genomics.roitools import Region, BedFeature
from regiontools.genomics.linear_index import build_index
from regiontools.genomics.region_query import query, count
from regiontools.util.services.exceptions import MalformedSourceError

BIN_SIZES = [1,7,50,128,1000,100000]


def random_features(seed=5,contigs=("chr1","chr2","chr3"),num=150,max_length=400):
    """Generate sorted features of varying lengths, including a few very long ones"""
    rs = numpy.random.RandomState(seed)
    features = []
    for contig in contigs:
        starts  = numpy.sort(rs.randint(1,20000,size=num))
        lengths = rs.randint(1,max_length,size=num)
        lengths[rs.randint(0,num,size=3)] = 6000
        for n, (start,length) in enumerate(zip(starts,lengths)):
            features.append(BedFeature(contig,int(start),int(start + length - 1),name="%s_%s" % (contig,n),score="0"))

    return features


class TestQuery(TempDirTestCase):

    def setUp(self):
        TempDirTestCase.setUp(self)
        self.features = random_features()
        self.bed = self.write("features.bed","".join(X.as_bed() for X in self.features))
        self.reader = BED_Reader(self.bed)

        rs = numpy.random.RandomState(13)
        self.regions = []
        for contig in ("chr1","chr2","chr3"):
            for start, length in zip(rs.randint(1,26000,size=40),rs.randint(1,3000,size=40)):
                self.regions.append(Region(contig,int(start),int(start + length - 1)))

        # regions touching single features at their boundaries
        for feature in self.features[::25]:
            self.regions.append(Region(feature.contig,feature.start,feature.start))
            self.regions.append(Region(feature.contig,feature.end,feature.end))
            self.regions.append(Region(feature.contig,feature.end + 1,feature.end + 1))

    def tearDown(self):
        self.reader.close()
        TempDirTestCase.tearDown(self)

    def test_query_matches_brute_force(self):
        for bin_size in BIN_SIZES:
            index = build_index(self.reader,bin_size=bin_size)
            for region in self.regions:
                expected = brute_force_overlaps(self.features,region)
                found    = list(query(index,self.reader,region))
                self.assertEqual(found,expected,
                                 msg="Wrong features for %s at bin size %s" % (region,bin_size))

    def test_count(self):
        index = build_index(self.reader,bin_size=128)
        for region in self.regions[::5]:
            self.assertEqual(count(index,self.reader,region),len(brute_force_overlaps(self.features,region)))

    def test_records_yielded_in_file_order_once(self):
        index = build_index(self.reader,bin_size=50)
        region = Region("chr2",1,25000)
        found = list(query(index,self.reader,region))
        self.assertEqual([X.name for X in found],["chr2_%s" % X for X in range(150)])

    def test_absent_contig_yields_nothing(self):
        index = build_index(self.reader,bin_size=50)
        self.assertEqual(list(query(index,self.reader,Region("chrX",1,1000000))),[])

    def test_region_past_end_of_contig(self):
        index = build_index(self.reader,bin_size=50)
        region = Region("chr1",10**8,10**8 + 10)
        self.assertEqual(list(query(index,self.reader,region)),[])


class TestQueryEdgeCases(TempDirTestCase):

    def test_long_record_found_from_distant_bin(self):
        bed = self.write("long.bed","chr1\t0\t50000\tlong\nchr1\t100\t200\tshort\nchr1\t40000\t40010\tlate\n")
        with BED_Reader(bed) as reader:
            index = build_index(reader,bin_size=100)
            found = list(query(index,reader,Region("chr1",45000,45001)))

        self.assertEqual([X.name for X in found],["long"])

    def test_one_position_overlaps(self):
        bed = self.write("small.bed","chr1\t9\t10\tat_10\nchr1\t10\t11\tat_11\n")
        with BED_Reader(bed) as reader:
            index = build_index(reader,bin_size=1)
            self.assertEqual([X.name for X in query(index,reader,Region("chr1",10,10))],["at_10"])
            self.assertEqual([X.name for X in query(index,reader,Region("chr1",11,11))],["at_11"])
            self.assertEqual([X.name for X in query(index,reader,Region("chr1",10,11))],["at_10","at_11"])

    def test_unsorted_records_raise_during_query(self):
        bed = self.write("sorted.bed","chr1\t0\t10\ta\nchr1\t20\t30\tb\nchr1\t40\t50\tc\n")
        with BED_Reader(bed) as reader:
            index = build_index(reader,bin_size=10)

        # rewrite the file with the same byte layout, but out of order, leaving a stale index
        self.write("sorted.bed","chr1\t0\t10\ta\nchr1\t40\t50\tc\nchr1\t20\t30\tb\n")
        with BED_Reader(bed) as reader:
            results = query(index,reader,Region("chr1",1,100))
            self.assertEqual(next(results).name,"a")
            self.assertEqual(next(results).name,"c")
            self.assertRaises(MalformedSourceError,next,results)

    def test_query_is_lazy(self):
        bed = self.write("sorted.bed","chr1\t0\t10\ta\n")
        with BED_Reader(bed) as reader:
            index = build_index(reader,bin_size=10)
            results = query(index,reader,Region("chr1",1,100))
            self.assertEqual(reader.tell(),reader.data_start + len("chr1\t0\t10\ta\n"))
            self.assertEqual(record_keys(results),[("chr1",1,10)])
