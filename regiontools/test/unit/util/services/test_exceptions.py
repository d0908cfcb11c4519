#!/usr/bin/env python
"""Test cases for :py:mod:`regiontools.util.services.exceptions`"""
import unittest
import warnings

from regiontools.util.services.exceptions import MalformedFileError, MalformedSourceError,\
                                                 IndexPersistenceError, DataWarning,\
                                                 MissingContigWarning, FileFormatWarning,\
                                                 filterwarnings, reset_filters, warn,\
                                                 formatwarning


class TestExceptions(unittest.TestCase):

    def test_malformed_file_error_message(self):
        err = MalformedFileError("a.bed","Bad line")
        self.assertEqual(str(err),"Error reading file 'a.bed': Bad line")
        err = MalformedFileError("a.bed","Bad line",line_num=12)
        self.assertEqual(str(err),"Error reading file 'a.bed' at line 12: Bad line")
        self.assertEqual(err.line_num,12)

    def test_malformed_source_error_is_malformed_file_error(self):
        err = MalformedSourceError("a.vcf","Unsorted")
        self.assertTrue(isinstance(err,MalformedFileError))
        self.assertEqual(err.filename,"a.vcf")

    def test_index_persistence_error_is_io_error(self):
        err = IndexPersistenceError("a.vcf.idx","Permission denied")
        self.assertTrue(isinstance(err,IOError))
        self.assertEqual(err.reason,"Permission denied")
        self.assertTrue("a.vcf.idx" in str(err))


class TestOncePerFamily(unittest.TestCase):

    def setUp(self):
        reset_filters()

    def tearDown(self):
        reset_filters()

    def _count_warnings(self,messages,category=DataWarning):
        with warnings.catch_warnings(record=True) as warns:
            warnings.simplefilter("always")
            for message in messages:
                warn(message,category)

        return [str(X.message) for X in warns]

    def test_one_warning_per_family(self):
        filterwarnings("onceperfamily","is not in the sequence dictionary of",category=DataWarning)
        messages = ["Contig '%s' is not in the sequence dictionary of 'a.bam'" % X for X in ("chrM","chrY","chrM")]
        found = self._count_warnings(messages)
        self.assertEqual(found,messages[:1])

    def test_other_families_unaffected(self):
        filterwarnings("onceperfamily","is not in the sequence dictionary of",category=DataWarning)
        messages = ["Region 'a' has zero length. Skipping.",
                    "Region 'b' has zero length. Skipping."]
        self.assertEqual(self._count_warnings(messages),messages)

    def test_subclass_categories_match(self):
        filterwarnings("onceperfamily","is not in the sequence dictionary of",category=DataWarning)
        messages = ["Contig '%s' is not in the sequence dictionary of 'a.bam'" % X for X in ("chrM","chrY")]
        self.assertEqual(len(self._count_warnings(messages,MissingContigWarning)),1)

    def test_other_categories_unaffected(self):
        filterwarnings("onceperfamily","is not in the sequence dictionary of",category=DataWarning)
        messages = ["Contig '%s' is not in the sequence dictionary of 'a.bam'" % X for X in ("chrM","chrY")]
        self.assertEqual(len(self._count_warnings(messages,FileFormatWarning)),2)

    def test_reset_forgets_seen_families(self):
        filterwarnings("onceperfamily","zero length",category=DataWarning)
        self.assertEqual(len(self._count_warnings(["Region 'a' has zero length."])),1)
        reset_filters()
        filterwarnings("onceperfamily","zero length",category=DataWarning)
        self.assertEqual(len(self._count_warnings(["Region 'a' has zero length."])),1)

    def test_duplicate_filter_not_added_twice(self):
        from regiontools.util.services.exceptions import pl_filters
        filterwarnings("onceperfamily","zero length",category=DataWarning)
        filterwarnings("onceperfamily","zero length",category=DataWarning)
        self.assertEqual(len(pl_filters),1)


def test_formatwarning_includes_category_and_message():
    found = formatwarning("Something odd happened",DataWarning,"some_file.py",10,line="x = 1")
    assert "DataWarning" in found
    assert "Something odd happened" in found
    assert "some_file.py" in found
