#!/usr/bin/env python
"""This module contains classes that:

  - build :class:`argparse.ArgumentParser` objects for options shared by
    the command-line scripts in :mod:`regiontools.bin`

  - parse those arguments into useful objects, such as warning filters,
    or indexed, file-backed overlap lookups


Arguments are grouped into the following sets:

    ===========================================================   ======================================
    **Parameter/argument set**                                    **Parser building class**
    -----------------------------------------------------------   --------------------------------------
    Generic parameters (e.g. for error reporting, logging)        :class:`BaseParser`

    Sidecar index parameters (bin size, rebuilding)               :class:`IndexParser`
    ===========================================================   ======================================


Example
-------
To use any of these in your own command line scripts, follow these steps:

  #. Create a parser factory, and supply the parser it creates as a `parent`
     when you build your script's :class:`ToolArgumentParser`::

         >>> bp = BaseParser()
         >>> ip = IndexParser()
         >>> parser = ToolArgumentParser(parents=[bp.get_parser(),ip.get_parser()])
         >>> parser.add_argument("vcf_file",type=str)

  #. Then, parse the arguments::

         >>> args = parser.parse_args()
         >>> bp.get_base_ops_from_args(args)
         >>> with ip.get_genome_hash_from_args(args,args.vcf_file) as vcf_hash:
         >>>     pass # rest of your script


See Also
--------
:py:mod:`argparse`
    Python documentation on argument parsing

:py:obj:`regiontools.bin`
    Source code of command-line scripts, for further examples
"""
import sys
import os
import getpass
import platform
import socket
import argparse

from regiontools.util.services.exceptions import ArgumentWarning, DataWarning,\
                                                 FileFormatWarning, MissingContigWarning,\
                                                 IndexPersistenceWarning, filterwarnings, warn
from regiontools.util.io.openers import NullWriter
from regiontools.genomics.linear_index import DEFAULT_BIN_SIZE


_DEFAULT_INDEX_PARSER_TITLE = "index options"
_DEFAULT_INDEX_PARSER_DESCRIPTION = \
"""Record files are indexed by a sidecar file named after the record file,
plus the suffix '.idx'. The sidecar is created on first use, and reused
afterwards."""



#===============================================================================
# INDEX: Base class for parsers
#===============================================================================

class ToolArgumentParser(argparse.ArgumentParser):
    """:class:`argparse.ArgumentParser` that exits with status 1, instead of 2,
    when arguments are missing or invalid
    """

    def error(self,message):
        self.print_usage(sys.stderr)
        sys.stderr.write("%s: error: %s\n" % (self.prog,message))
        sys.exit(1)


class Parser(object):
    """Base class for argument parser factories used below

    Parameters
    ----------
    groupname : str, optional
        Name of argument group. If not `None`, an argument group with
        the specified name will be created and added to the parser.
        If not, arguments will be in the main group.

    prefix : str, optional
        string prefix to add to default argument options (Default: "")

    disabled : list, optional
        list of parameter names that should be disabled from parser,
        without preceding dashes
    """

    def __init__(self,groupname=None,prefix="",disabled=None,**kwargs):
        self.prefix = prefix
        self.disabled = [] if disabled is None else disabled
        self.groupname = groupname

        # define in __init__ of subclass
        self.arguments = []

    def get_parser(self,parser=None,groupname=None,arglist=None,title=None,description=None,**kwargs):
        """Create an populate :class:`argparse.ArgumentParser` with arguments

        Parameters
        ----------
        parser : :class:`argparse.ArgumentParser` or None, optional
            If `None`, a new parser will be created, and arguments will be added
            to it. If not `None`, arguments will be added to `parser`.
            (Default: `None`)

        groupname : str or None, optional
            If not `None`, default to `self.groupname`. If either `groupname`
            or `self.groupname` is not `None`, an option group with this name
            will be added to `parser`, and arguments added to that groupname
            instead of the main argument group of `parser`. In this case, `title`
            and `description` will be applied to the option group instead of to `parser`.
            Default : `None`)

        arglist : list, optional
            If not `None`, arguments in this list will be added to `parser`.
            Otherwise, arguments will be taken from `self.arguments`.

            The list should be a list of tuples of ('argument_name',dict_of_options),
            where `argument_name` is a string, and `dict_of_options` a dictionary
            of keyword arguments to pass to :meth:`argparse.ArgumentParser.add_argument`.

        title : str, optional
            Optional title for parser

        description : str, optional
            Optional description for parser

        kwargs : keyword arguments
            Additional arguments passed during creation of :class:`argparse.ArgumentParser`


        Returns
        -------
        :class:`argparse.ArgumentParser`
        """
        if groupname is None:
            groupname = self.groupname

        if parser is None:
            if groupname is None:
                parser = argparse.ArgumentParser(description=description,add_help=False,**kwargs)
            else:
                parser = argparse.ArgumentParser(add_help=False,**kwargs)

        addto = parser
        if groupname is not None:
            addto = parser.add_argument_group(title=title,description=description)

        arglist = self.arguments if arglist is None else arglist
        for arg_name, arg_opts in filter(lambda x: x[0] not in self.disabled,arglist):
            addto.add_argument("--%s%s" % (self.prefix,arg_name),**arg_opts)

        return parser



#===============================================================================
# INDEX: Sidecar index parser
#===============================================================================

class IndexParser(Parser):
    """Parser for options controlling how sidecar indexes are built and reused

    Parameters
    ----------
    groupname : str, optional
        Name of argument group. (Default: `'index_options'`)

    prefix : str, optional
        string prefix to add to default argument options (Default: "")

    disabled : list, optional
        list of parameter names that should be disabled from parser,
        without preceding dashes
    """

    def __init__(self,groupname="index_options",prefix="",disabled=None):
        Parser.__init__(self,groupname=groupname,prefix=prefix,disabled=disabled)
        self.arguments = [
            ("bin_size",       dict(type=int,default=DEFAULT_BIN_SIZE,metavar="N",
                                    help="Width of index bins, in nucleotides, used when "+\
                                         "an index is built (Default: %s)" % DEFAULT_BIN_SIZE)),
            ("rebuild_index",  dict(default=False,action="store_true",
                                    help="Rebuild sidecar indexes even if they exist")),
            ("check_index",    dict(default=False,action="store_true",
                                    help="Rebuild sidecar indexes whose recorded file size "+\
                                         "or modification time no longer matches the record file")),
        ]

    def get_parser(self,title=_DEFAULT_INDEX_PARSER_TITLE,description=_DEFAULT_INDEX_PARSER_DESCRIPTION):
        """Return an :py:class:`~argparse.ArgumentParser` that opens sidecar-indexed files

        Parameters
        ----------
        title : str, optional
            title for option group (used in command-line help screen)

        description : str, optional
            description of parser (used in command-line help screen)

        Returns
        -------
        :class:`argparse.ArgumentParser`
        """
        return Parser.get_parser(self,title=title,description=description)

    def get_index_options_from_args(self,args):
        """Collect keyword arguments for :func:`~regiontools.genomics.index_store.load_or_build`

        Parameters
        ----------
        args : :py:class:`argparse.Namespace`
            Namespace object from :py:func:`argparse.ArgumentParser.parse_args`

        Returns
        -------
        dict
            with keys `'bin_size'`, `'rebuild'`, and `'check_freshness'`
        """
        args = PrefixNamespaceWrapper(args,self.prefix)
        bin_size = args.bin_size
        if bin_size < 1:
            warn("Bin size must be a positive integer. Found %s. Using default of %s." % (bin_size,DEFAULT_BIN_SIZE),
                 ArgumentWarning)
            bin_size = DEFAULT_BIN_SIZE

        return { "bin_size"        : bin_size,
                 "rebuild"         : args.rebuild_index,
                 "check_freshness" : args.check_index,
                }

    def get_genome_hash_from_args(self,args,filename,reader_class=None,printer=None):
        """Open `filename` as an overlap lookup, indexing it if necessary

        BAM files are opened through :mod:`pysam`, and must be sorted and
        indexed by a `.bai` file. Other files are read as text, and indexed
        by a sidecar file.

        Parameters
        ----------
        args : :py:class:`argparse.Namespace`
            Namespace object from :py:func:`argparse.ArgumentParser.parse_args`

        filename : str
            Name of record file

        reader_class : class, optional
            Subclass of :class:`~regiontools.readers.common.AbstractRecordReader`
            used to parse `filename`. If `None`, guessed from the extension of
            `filename`

        printer : file-like, optional
            Logger. (Default: :class:`~regiontools.util.io.openers.NullWriter`)

        Returns
        -------
        |AbstractGenomeHash|
        """
        from regiontools.genomics.genome_hash import IndexedGenomeHash, BAMGenomeHash
        from regiontools.readers import get_reader_class

        if printer is None:
            printer = NullWriter()

        if filename.lower().endswith(".bam"):
            printer.write("Opening BAM file '%s'..." % filename)
            return BAMGenomeHash(filename)

        if reader_class is None:
            reader_class = get_reader_class(filename)

        return IndexedGenomeHash(filename,reader_class,printer=printer,
                                 **self.get_index_options_from_args(args))



#===============================================================================
# INDEX: Warning/logging parser
#===============================================================================

class BaseParser(Parser):
    """Parser basic options

    Parameters
    ----------
    groupname : str, optional
        Name of argument group. If not `None`, an argument group with
        the specified name will be created and added to the parser.
        If not, arguments will be in the main group.

    prefix : str, optional
        string prefix to add to default argument options (Default: "")

    disabled : list, optional
        list of parameter names that should be disabled from parser,
        without preceding dashes
    """

    def __init__(self,groupname="base_options",prefix="",disabled=None):
        Parser.__init__(self,groupname=groupname,prefix=prefix,disabled=disabled)
        self.arguments = []

    def get_parser(self,title=None,description=None):
        """Return an :py:class:`~argparse.ArgumentParser`

        Parameters
        ----------
        title : str, optional
            title for option group (used in command-line help screen)

        description : str, optional
            description of parser (used in command-line help screen)

        Returns
        -------
        :class:`argparse.ArgumentParser`
        """
        p = Parser.get_parser(self)
        g = p.add_argument_group(title="warning/error options")

        g.add_argument("-q","--quiet",dest="warnlevel",action="store_const",const=-1,
                       help="Suppress all warning messages. Cannot use with '-v'.")
        g.add_argument("-v","--verbose",dest="warnlevel",action="count",
                       help="Increase verbosity. With '-v', show every warning. With '-vv', turn warnings into exceptions. Cannot use with '-q'. (Default: show each type of warning once)")
        p.set_defaults(warnlevel=0)

        return p

    def get_base_ops_from_args(self,args):
        """Install warning filters for the warning level chosen on the command line

        Parameters
        ----------
        args : :py:class:`argparse.Namespace`
            Namespace object from :py:func:`argparse.ArgumentParser.parse_args`
        """
        args = PrefixNamespaceWrapper(args,self.prefix)
        warnlevel = args.warnlevel
        actions = ["ignore",
                   "onceperfamily",
                   "always",
                   "error"]

        if warnlevel >= len(actions) - 1:
            warnlevel = len(actions) - 2

        action = actions[warnlevel+1]
        for type_, msg in REGIONTOOLS_WARNINGS:
            filterwarnings(action,message=msg,category=type_)


REGIONTOOLS_WARNINGS = [

    # argparsers
    (ArgumentWarning,"Bin size must be a positive integer"),

    # index_store
    (FileFormatWarning,"Could not parse index file"),
    (IndexPersistenceWarning,"Could not save index"),

    # genome_hash, target_coverage
    (MissingContigWarning,r".*is not in the sequence dictionary of"),

    # target_coverage
    (DataWarning,r".*has zero length. Skipping."),

    # vcf_to_tab
    (DataWarning,r".*not declared in the header of"),
]



#===============================================================================
# INDEX: Utility functions
#===============================================================================

class PrefixNamespaceWrapper(object):
    """Wrapper class to facilitate processing of :py:class:`~argparse.Namespace`
    objects created by parsers with non-empty ``prefix`` values, as if no
    prefix had been used.

    Attributes
    ----------
    namespace : :py:class:`~argparse.Namespace`
        Result of calling :py:meth:`argparse.ArgumentParser.parse_args`

    prefix : str
        Prefix that will be prepended to names of attributes of `self.namespace`
        before they are fetched. Must match prefix that was used in creation
        of the :py:class:`argparse.ArgumentParser` that created `self.namespace`
    """

    def __init__(self,namespace,prefix):
        self.namespace = namespace
        self.prefix = prefix

    def __getattr__(self,k):
        """Fetch an attribute from `self.namespace`, appending `self.prefix` to `k`
        before fetching

        Parameters
        ----------
        k : str
            Attribute to fetch
        """
        return getattr(self.namespace,"%s%s" % (self.prefix,k))


def print_configuration_info(printer):
    """Log the user, host, platform, and interpreter running a script

    Parameters
    ----------
    printer : file-like
        Logger, e.g. a :class:`~regiontools.util.io.filters.NameDateWriter`
    """
    import regiontools
    try:
        user = getpass.getuser()
    except (KeyError,OSError):
        user = os.environ.get("USER","unknown")

    printer.write("Executing as %s@%s on %s %s (%s)" % (user,
                                                        socket.gethostname(),
                                                        platform.system(),
                                                        platform.release(),
                                                        platform.machine()))
    printer.write("Python %s (%s); regiontools %s" % (platform.python_version(),
                                                      platform.python_implementation(),
                                                      regiontools.__version__))
