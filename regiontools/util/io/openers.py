#!/usr/bin/env python
"""Various wrappers and utilities for opening, closing, and writing files.

Important methods
-----------------
:py:func:`opener`
    Guesses whether an output file should be gzipped or bzipped based upon
    its file extension, opens it appropriately, and returns a file-like object.

:py:func:`read_pl_table`
    Wrapper function to open a table saved by one of :data:`regiontools`'
    command-line scripts into a :class:`pandas.DataFrame`.

:py:func:`get_short_name`
    Basename of a script or module, used to label log output

:py:func:`open_output`
    Open an output file, or, if no filename is given, a |LogWriter| that
    sends output to the log stream

:py:class:`NullWriter`
    Returns an open filehandle to the system's null location.
"""
import os
import re
import pandas as pd
from regiontools.util.io.filters import AbstractWriter


class NullWriter(AbstractWriter):
    """Writes to system-dependent null location.
    On Unix-like systems & OSX, this is typically /dev/null. On Windows, simply "nul"
    """

    def __init__(self):
        self.stream = open(os.devnull,"w")

    def filter(self,stream):
        return stream

    def __repr__(self):
        # unusual repr, but useful for documentation by Sphinx
        return "NullWriter()"

    def __str__(self):
        return self.__repr__()


def opener(filename,mode="r",**kwargs):
    """Open a file, compressing or decompressing it if its extension is
    `'.gz'` or `'.bz2'`. Text modes are preserved for compressed files.

    Parameters
    ----------
    filename : str
        Name of file to open

    mode : str
        Mode in which to open file (e.g. `'r'`, `'w'`, `'rb'`)

    **kwargs
        Other parameters to pass to appropriate file opener

    Returns
    -------
    open file-like
    """
    if filename.endswith(".gz"):
        import gzip
        if "b" not in mode and "t" not in mode:
            mode += "t"
        call_func = gzip.open
    elif filename.endswith(".bz2"):
        import bz2
        if "b" not in mode and "t" not in mode:
            mode += "t"
        call_func = bz2.open
    else:
        call_func = open

    return call_func(filename,mode,**kwargs)

def read_pl_table(filename,**kwargs):
    """Open a table saved by one of :data:`regiontools`' command-line scripts,
    passing default arguments to :func:`pandas.read_csv`:

        ==========   =======
        Key          Value
        ----------   -------
        sep          `"\\t"`
        comment      `"#"`
        index_col    `None`
        header       `0`
        ==========   =======

    Parameters
    ----------
    filename : str
        Name of file. Can be gzipped or bzipped.

    kwargs : keyword arguments
        Other keyword arguments to pass to :func:`pandas.read_csv`.
        Will override defaults.

    Returns
    -------
    :class:`pandas.DataFrame`
        Table of results
    """
    args = { "sep"        : "\t",
             "comment"    : "#",
             "index_col"  : None,
             "header"     : 0,
        }
    args.update(kwargs)
    return pd.read_csv(filename,**args)

def get_short_name(inpt,separator=os.path.sep,terminator=""):
    """Gives the basename of a filename or module name passed as a string.
    If the string doesn't match the pattern specified by the separator
    and terminator, it is returned unchanged.

    Examples
    --------
    >>> get_short_name("test")
    'test'

    >>> get_short_name("/home/jdoe/test.py",terminator=".py")
    'test'

    >>> get_short_name("regiontools.bin.test",separator=r"\\.",terminator="")
    'test'

    Parameters
    ----------
    inpt : str
        Input

    separator : str
        Path separator, as a regex character class fragment (default: :obj:`os.path.sep`)

    terminator : str
        File terminator (default: "")

    Returns
    -------
    str
    """
    tlen = len(terminator)
    if tlen > 0 and inpt[-tlen:] == terminator:
        inpt = inpt[:-tlen]

    pat = r"([^%s]+)+$" % separator
    try:
        stmp = re.search(pat,inpt).group(1)
    except AttributeError:
        return inpt

    return stmp


class LogWriter(AbstractWriter):
    """Forward each line of text written to a logger, such as a
    :class:`~regiontools.util.io.filters.NameDateWriter`. Closing a
    |LogWriter| leaves the logger open.

    Parameters
    ----------
    printer : file-like
        Logger implementing a ``write()`` method
    """

    def write(self,data):
        for line in data.splitlines():
            self.stream.write(self.filter(line))

    def filter(self,data):
        return data

    def close(self):
        self.flush()


def open_output(filename,printer,mode="w"):
    """Open `filename` for writing, or, if `filename` is `None`, return a
    |LogWriter| that sends output to `printer`

    Parameters
    ----------
    filename : str or None
        Name of output file

    printer : file-like
        Logger used when `filename` is `None`

    mode : str, optional
        Mode in which to open file (Default: `'w'`)

    Returns
    -------
    file-like
    """
    if filename is None:
        return LogWriter(printer)

    return opener(filename,mode)
