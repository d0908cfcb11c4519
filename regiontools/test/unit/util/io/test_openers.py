#!/usr/bin/env python
"""Test cases for :py:mod:`regiontools.util.io.openers`"""
import io
import os
import gzip
import shutil
import tempfile

from regiontools.util.io.openers import get_short_name, opener, open_output, read_pl_table,\
                                        LogWriter, NullWriter
from regiontools.util.io.filters import NameDateWriter


def test_get_short_name():
    tests = [("test","test",{}),
             ("test.py","test",dict(terminator=".py")),
             ("/home/jdoe/test.py","test",dict(terminator=".py")),
             ("/home/jdoe/test.py.py","test.py",dict(terminator=".py")),
             ("/home/jdoe/test.py.2","test.py.2",{}),
             ("/home/jdoe/test.py.2","test.py.2",dict(terminator=".py")),
             ("regiontools.bin.test","test",dict(separator=r"\.",terminator=""))
             ]
    for inp, expected, kwargs in tests:
        found = get_short_name(inp,**kwargs)
        assert found == expected, "get_short_name(): failed on input '%s'. Expected '%s'. Got '%s'" % (inp,expected,found)

def test_log_writer_sends_lines_to_printer():
    buf = io.StringIO()
    printer = NameDateWriter("test",stream=buf)
    writer = LogWriter(printer)
    writer.write("first\tline\nsecond line\n")
    writer.close()
    lines = buf.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("test [")
    assert lines[0].endswith(": first\tline")
    assert lines[1].endswith(": second line")

    # printer stays open
    printer.write("still open")
    assert buf.getvalue().endswith("still open\n")

def test_null_writer():
    writer = NullWriter()
    writer.write("discarded")
    writer.close()

class TestFileHelpers(object):

    def setup_method(self,method):
        self.tmpdir = tempfile.mkdtemp(prefix="regiontools_test_")

    def teardown_method(self,method):
        shutil.rmtree(self.tmpdir,ignore_errors=True)

    def test_open_output_without_filename_logs(self):
        buf = io.StringIO()
        fout = open_output(None,NameDateWriter("test",stream=buf))
        assert isinstance(fout,LogWriter)
        fout.write("a\tb\n")
        assert buf.getvalue().rstrip("\n").endswith("a\tb")

    def test_open_output_to_file(self):
        filename = os.path.join(self.tmpdir,"out.txt")
        with open_output(filename,NullWriter()) as fout:
            fout.write("a\tb\n")

        with open(filename) as fh:
            assert fh.read() == "a\tb\n"

    def test_opener_compresses_by_extension(self):
        filename = os.path.join(self.tmpdir,"out.txt.gz")
        with opener(filename,"w") as fout:
            fout.write("compressed text\n")

        with gzip.open(filename,"rt") as fh:
            assert fh.read() == "compressed text\n"

        with opener(filename) as fh:
            assert fh.read() == "compressed text\n"

    def test_read_pl_table(self):
        filename = os.path.join(self.tmpdir,"table.txt")
        with open(filename,"w") as fout:
            fout.write("## generated by a test\n")
            fout.write("name\tcount\tcoverage\n")
            fout.write("a\t3\t0.5\n")
            fout.write("b\t0\t0.0\n")

        df = read_pl_table(filename)
        assert list(df.columns) == ["name","count","coverage"]
        assert list(df["name"]) == ["a","b"]
        assert list(df["count"]) == [3,0]
