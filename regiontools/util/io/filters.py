#!/usr/bin/env python
"""Utility classes, analagous to Unix-style pipes, for filtering or processing
input or output streams, such as file objects or iterators of records.

Filters may be composed by wrapping one around another.

Readers:

    :class:`AbstractReader`
        Base class for all Readers. To create a Reader, subclass this and
        override the :py:meth:`~AbstractReader.filter` method.

Writers:

    :class:`AbstractWriter`
        Base class for all writers. To create a Writer, subclass this and
        override the :py:meth:`~AbstractWriter.filter` method.

    :class:`ColorWriter`
        Enable ANSI coloring of text to output streams that support color.
        For streams that do not support color, text is not colored.

    :class:`NameDateWriter`
        Prepend program name and timestamp to each line of string input before
        writing. Command-line scripts in :mod:`regiontools.bin` use these as
        their log streams.

And one convenience function:

    :func:`colored`
        Colorize text (via :func:`termcolor.colored`) if and only
        if color is supported by :obj:`sys.stderr`


Examples
--------
Write to stderr, prepending name and date::

    >>> printer = NameDateWriter("my_script")
    >>> printer.write("Processed 1000 regions...")
    my_script [2016-01-01 12:00:00]: Processed 1000 regions...
"""
import sys
import datetime
from abc import abstractmethod
from io import IOBase

import termcolor

if hasattr(sys.stderr,"isatty") and sys.stderr.isatty():
    colored = termcolor.colored
else:
    colored = lambda x, **kwargs: str(x)



#===============================================================================
# INDEX: readers
#===============================================================================

class AbstractReader(IOBase):
    """Abstract base class for stream-reading filters. These may be wrapped around
    iterators or open file-like objects, to check or convert each unit of input.

    Create a filter by subclassing this, and defining `self.filter()`

    See also
    --------
    regiontools.readers.common.SortOrderValidator
        A reader that checks the sort order of genomic records
    """

    def __init__(self,stream):
        """Create an |AbstractReader|

        Parameters
        ----------
        stream : iterator or file-like
            Input data
        """
        self.stream = stream

    def isatty(self):
        return hasattr(self.stream,"isatty") and self.stream.isatty()

    def writable(self):
        return False

    def seekable(self):
        return False

    def readable(self):
        return True

    def fileno(self):
        raise IOError()

    def __next__(self):
        return self.filter(next(self.stream))

    def __iter__(self):
        return self

    def close(self):
        """Close stream"""
        try:
            self.stream.close()
        except AttributeError:
            pass

    @abstractmethod
    def filter(self,data):
        """Method that filters or processes each unit of data.
        Override this in subclasses

        Parameters
        ----------
        data : unit of data
            Whatever data to filter/format. Often string, but not necessary

        Returns
        -------
        object
            formatted data
        """
        pass



#===============================================================================
# INDEX: writers
#===============================================================================

class AbstractWriter(IOBase):
    """Abstract base class for stream-writing filters.
    Create a filter by subclassing this, and defining self.filter().

    Parameters
    ----------
    stream : file-like, open for writing
        Output stream to which filtered/formatted data will be written
    """
    def __init__(self,stream):
        self.stream = stream

    def isatty(self):
        return hasattr(self.stream,"isatty") and self.stream.isatty()

    def writable(self):
        return True

    def seekable(self):
        return False

    def readable(self):
        return False

    def fileno(self):
        raise IOError()

    def write(self,data):
        """Write data to `self.stream`

        Parameters
        ----------
        data : unit of data
            Whatever data to filter/format. Often string, but not necessary
        """
        self.stream.write(self.filter(data))

    def flush(self):
        """Flush `self.stream`"""
        self.stream.flush()

    def close(self):
        """Flush and close `self.stream`"""
        try:
            self.flush()
            self.stream.close()
        except (AttributeError,ValueError):
            pass

    @abstractmethod
    def filter(self,data):
        """Method that filters or processes each unit of data.
        Override this in subclasses

        Parameters
        ----------
        data : unit of data
            Whatever data to filter/format. Often string, but not necessarily

        Returns
        -------
        object
            formatted data
        """
        pass


class ColorWriter(AbstractWriter):
    """Detect whether output stream supports color, and enable/disable colored output

    Parameters
    ----------
    stream : file-like
        Stream to write to (Default: :obj:`sys.stderr`)
    """
    def __init__(self,stream=None):
        AbstractWriter.__init__(self,stream)
        self._use_color = hasattr(self.stream,"isatty") and self.stream.isatty()

    # `None` tracks whatever sys.stderr is at the time of writing
    @property
    def stream(self):
        return sys.stderr if self._stream is None else self._stream

    @stream.setter
    def stream(self,val):
        self._stream = val

    def color(self,text,**kwargs):
        """Color `text` with attributes specified in `kwargs` if `stream` supports ANSI color.

        See :func:`termcolor.colored` for usage

        Returns
        -------
        str
            `text`, colored as indicated, if color is supported
        """
        if self._use_color:
            return termcolor.colored(text,**kwargs)

        return text

    def filter(self,data):
        return data


class NameDateWriter(ColorWriter):
    """Prepend program name, date, and time to each line of output"""

    def __init__(self,name,line_delimiter="\n",stream=None):
        """Create a NameDateWriter

        Parameters
        ----------
        name : str
            Name to prepend

        line_delimiter : str, optional
            Delimiter, postpended to lines. (Default `'\\n'`)

        stream : file-like
            Stream to write to (Default: :obj:`sys.stderr`)
        """
        ColorWriter.__init__(self,stream=stream)
        self.name = name
        self.delimiter = line_delimiter
        self.fmtstr = "%s %s%s %s%s: {2}%s" % (self.color(name,color="blue",attrs=["bold"]),
                                               self.color("[",color="blue",attrs=["bold"]),
                                               self.color("{0}",color="green"),
                                               self.color("{1}",color="green",attrs=["bold"]),
                                               self.color("]",color="blue",attrs=["bold"]),
                                               self.delimiter
                                              )

    def filter(self,line):
        """Prepend date and time to each line of input

        Parameters
        ----------
        line : str
            Input

        Returns
        -------
        str : Input with date and time prepended
        """
        now = datetime.datetime.now()
        d   = now.strftime("%Y-%m-%d")
        t   = now.strftime("%H:%M:%S")
        return self.fmtstr.format(d,t,line.strip(self.delimiter))

    def __call__(self,line):
        self.write(line)
