#!/usr/bin/env python
"""Function decorators useful for scripts, analyses, and tests

Decorators
----------
:py:func:`catch_stderr`
    Redirect standard error from a wrapped function into a buffer

:py:func:`skip_if_abstract`
    Function decorator for unit tests. Wrapped methods will be skipped if
    they are called from a :py:class:`unittest.TestCase` with `'Abstract'`
    in its name, and run only in subclasses of the abstract :py:class:`unittest.TestCase`
    in which they are defined
"""
import contextlib
import functools
import io
import unittest

def skip_if_abstract(func):
    """Decorator function to keep :py:mod:`unittest` from running methods
    (defined in abstract classes) that are only intended to be run when
    inherited by fully-fleshed out subclasses. Wrapped methods are actually
    called from all non-abstract subclasses that inherit the method.

    Parameters
    ----------
    func : function
        Function that should only be run in a non-abstract subclass

    Returns
    -------
    function
        wrapped function
    """
    @functools.wraps(func)
    def new_func(*args,**kwargs):
        if "Abstract" in args[0].__class__.__name__:
            raise unittest.SkipTest("Skipping all tests from abstract class (don't worry, this is expected).")

        return func(*args,**kwargs)

    return new_func

def catch_stderr(buf=None):
    """Function factory producing decorators that capture stderr to a buffer

    Parameters
    ----------
    buf : file-like, optional
        Buffer that will hold captured stderr output. Must implement
        ``write()``. If `None`, a new :class:`io.StringIO` is used, and
        discarded.

    Examples
    --------
    Capture log output of a command-line script::

        >>> from regiontools.bin.subtract_variants import main
        >>> buf = io.StringIO()
        >>> quiet_main = catch_stderr(buf)(main)
        >>> quiet_main(["a.vcf","b.vcf","out.vcf"])
        >>> buf.getvalue()
        # log output here

    Returns
    -------
    function
        Function decorator
    """
    def decorator(func,buf=buf):
        @functools.wraps(func)
        def new_func(*args,**kwargs):
            target = io.StringIO() if buf is None else buf
            with contextlib.redirect_stderr(target):
                return func(*args,**kwargs)

        return new_func

    return decorator
