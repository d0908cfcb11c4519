#!/usr/bin/env python
"""Classes used by multiple readers in this subpackage


Classes
-------
|AbstractRecordReader|
    Base class for readers of sorted, line-oriented record files. Readers
    remember the byte offset of each record, and can seek back to it, which
    is what sidecar indexes and region queries need.

|SortOrderValidator|
    Iterator adaptor that checks records are sorted by contig, then by start
    position, and raises |MalformedSourceError| as soon as they are not
"""
from abc import abstractmethod
from regiontools.util.io.filters import AbstractReader
from regiontools.util.io.openers import NullWriter
from regiontools.util.services.exceptions import MalformedFileError, MalformedSourceError


#===============================================================================
# INDEX: sort order validation
#===============================================================================

class SortOrderValidator(AbstractReader):
    """Pass records through unchanged, checking that they are sorted by contig,
    then by start position

    Parameters
    ----------
    stream : iterable
        Iterable of |Record| objects

    filename : str, optional
        Name of file from which records came, for error messages

    Raises
    ------
    |MalformedSourceError|
        when a record starts before the previous record on the same contig,
        or when records of a contig resume after records of another contig
    """

    def __init__(self,stream,filename="<record source>"):
        AbstractReader.__init__(self,stream)
        self.filename = filename
        self.reset()

    def reset(self):
        """Forget records seen so far"""
        self.seen_contigs = set()
        self.last = None

    def filter(self,record):
        last = self.last
        if last is None or record.contig != last.contig:
            if record.contig in self.seen_contigs:
                raise MalformedSourceError(self.filename,
                        "Records on contig '%s' resume at position %s after records on contig '%s'. File must be sorted by contig, then by start position." % (record.contig,record.start,last.contig))
            self.seen_contigs.add(record.contig)
        elif record.start < last.start:
            raise MalformedSourceError(self.filename,
                    "Record at %s:%s follows record at %s:%s. File must be sorted by contig, then by start position." % (record.contig,record.start,last.contig,last.start))

        self.last = record
        return record



#===============================================================================
# INDEX: readers
#===============================================================================

class AbstractRecordReader(AbstractReader):
    """Abstract base class for readers of sorted, line-oriented record files

    Files are opened in binary mode, so that :meth:`tell` and :meth:`seek`
    give exact byte offsets. Header lines at the top of the file are consumed
    when the reader is created, and stored in `header`. Blank lines, and lines
    recognized by :meth:`is_comment`, are skipped.

    Subclasses must implement :meth:`filter`, which parses a single line into
    a |Record|, and may override :meth:`is_header`, :meth:`is_comment`, and
    :meth:`chroms`.

    Parameters
    ----------
    filename : str
        Name of record file

    validate : bool, optional
        If `True`, records are passed through a |SortOrderValidator|, and
        unsorted input raises |MalformedSourceError| as soon as it is read.
        Validation restarts whenever the reader seeks. (Default: `False`)

    printer : file-like, optional
        Logger implementing a ``write()`` method. Default: |NullWriter|

    Attributes
    ----------
    filename : str
        Name of record file

    header : list
        Header lines, as strings, without line endings

    data_start : int
        Byte offset of first line following the header

    counter : int or None
        Number of the line most recently read, or `None` after a :meth:`seek`,
        when line numbers are no longer known
    """

    def __init__(self,filename,validate=False,printer=None):
        AbstractReader.__init__(self,open(filename,"rb"))
        self.filename  = filename
        self.printer   = NullWriter() if printer is None else printer
        self.validator = SortOrderValidator(None,filename) if validate == True else None
        self.header    = []
        self.counter   = 0

        while True:
            pos  = self.stream.tell()
            line = self.stream.readline()
            try:
                text = line.decode("utf-8").rstrip("\r\n")
            except UnicodeDecodeError as e:
                self.stream.close()
                raise MalformedFileError(filename,"Cannot decode line as UTF-8: %s" % e,
                                         line_num=self.counter + 1)

            if line and self.is_header(text):
                self.counter += 1
                self.header.append(text)
            else:
                self.stream.seek(pos)
                break

        self.data_start = self.stream.tell()
        self._header_lines = self.counter
        self.parse_header(self.header)

    def __repr__(self):
        return "<%s '%s'>" % (self.__class__.__name__,self.filename)

    def seekable(self):
        return True

    def is_header(self,line):
        """Return `True` if `line` belongs to the file header. Override in subclasses."""
        return False

    def is_comment(self,line):
        """Return `True` if `line` should be skipped. Override in subclasses."""
        return line.startswith("#")

    def parse_header(self,lines):
        """Process header lines after they are read. Override in subclasses."""
        pass

    def chroms(self):
        """Return the sequence dictionary declared in the file header

        Returns
        -------
        OrderedDict or None
            Dictionary mapping contig names to their lengths (or `None`, if
            unknown), or `None` if the file declares no sequence dictionary
        """
        return None

    def tell(self):
        """Return current byte offset in file"""
        return self.stream.tell()

    def seek(self,offset,whence=0):
        """Move to byte offset `offset`, which must be the start of a line

        Parameters
        ----------
        offset : int
            Byte offset, typically obtained from an index or :meth:`tell`

        Returns
        -------
        int
            New offset
        """
        self.counter = None
        if self.validator is not None:
            self.validator.reset()

        return self.stream.seek(offset,whence)

    def rewind(self):
        """Move to the first record in the file"""
        self.stream.seek(self.data_start)
        self.counter = self._header_lines
        if self.validator is not None:
            self.validator.reset()

    def next_with_offset(self):
        """Return the next record in the file, and its byte offset

        Returns
        -------
        tuple
            (`offset`, |Record|)

        Raises
        ------
        StopIteration
            at end of file

        |MalformedFileError|
            if a line cannot be parsed
        """
        while True:
            offset = self.stream.tell()
            line = self.stream.readline()
            if not line:
                raise StopIteration()

            if self.counter is not None:
                self.counter += 1

            try:
                text = line.decode("utf-8").rstrip("\r\n")
            except UnicodeDecodeError as e:
                raise MalformedFileError(self.filename,"Cannot decode line as UTF-8: %s" % e,
                                         line_num=self.counter)

            if text.strip() == "" or self.is_comment(text):
                continue

            try:
                record = self.filter(text)
            except (ValueError,IndexError) as e:
                raise MalformedFileError(self.filename,"Cannot parse line '%s': %s" % (text,e),
                                         line_num=self.counter)

            if self.validator is not None:
                self.validator.filter(record)

            return offset, record

    def __next__(self):
        return self.next_with_offset()[1]

    def iter_with_offsets(self):
        """Iterate over all records from the start of the file, with their byte offsets

        Yields
        ------
        tuple
            (`offset`, |Record|)
        """
        self.rewind()
        while True:
            try:
                yield self.next_with_offset()
            except StopIteration:
                return

    @abstractmethod
    def filter(self,line):
        """Parse a single line of the file into a |Record|. Implement in subclasses.

        Parameters
        ----------
        line : str
            Line of file, without line ending

        Returns
        -------
        |Record|
        """
        pass
