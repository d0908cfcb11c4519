#!/usr/bin/env python
"""Post-processors that reformat module docstrings for use as command-line
help, by removing `reStructuredText`_ markup and substitutions, and truncating
at the first `numpydoc`_ section that is only useful in rendered documentation.
"""
import re

_TRUNCATE_AT = ("Parameters",
                "Returns",
                "Yields",
                "Raises",
                "Attributes",
                "See also",
                "See Also",
                )

pyrst_pattern = re.compile(r"(?P<spacing>^|\s+)(?::(?P<domain>[^:`<>]+))?:(?P<role>[^:`]*):`(?P<argument>[^`<>]+)(?: +<(?P<pointer>[^`]+)>)?`")
"""Matches `reStructuredText`_ python roles, e.g. ``:py:class:`argument``` or ``:term:`argument```"""

subst_pattern = re.compile(r"\|([^|]*)\|")
"""Matches `reStructuredText`_ substitution tokens of form ``|substitution|``"""

link_pattern = re.compile(r"`([^`<>]+)( <[^`]+>)?`_")
"""Matches `reStructuredText`_ link references, e.g. ```Linkname`_``"""

_separator = "\n" + (78*"-") + "\n"


def shorten_help(inp):
    """Strip markup from a `numpydoc`_-formatted docstring, and truncate it at
    the first section heading that does not belong in command-line help

    Parameters
    ----------
    inp : str
        Docstring to format

    Returns
    -------
    str
        Cleaned helptext
    """
    inp = pyrst_pattern.sub(r"\g<spacing>\g<argument>",inp)
    inp = subst_pattern.sub(r"\g<1>",inp)
    inp = link_pattern.sub(r"\g<1>",inp)

    stop = len(inp)
    for token in _TRUNCATE_AT:
        match = re.search(r"^\s*%s\n\s*-+\n" % token,inp,re.M)
        if match is not None:
            stop = min(stop,match.start())

    return inp[:stop].strip() + "\n"

def format_module_docstring(inp):
    """Format a module docstring for use as the description of an
    :class:`argparse.ArgumentParser`, surrounding it with separators

    Parameters
    ----------
    inp : str
        Module docstring to format

    Returns
    -------
    str
        Formatted docstring
    """
    return _separator + "\n" + shorten_help(inp) + "\n" + _separator
