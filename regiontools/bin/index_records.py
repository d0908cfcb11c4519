#!/usr/bin/env python
"""Build sidecar indexes for sorted `BED`_, `VCF`_, or `SAM`_ files.

Each file `foo.vcf` is indexed by a file named `foo.vcf.idx`, which the other
scripts in :mod:`regiontools.bin` read instead of indexing `foo.vcf` again.
Existing indexes are kept unless ``--rebuild_index`` or ``--check_index`` is
given. File formats are guessed from extensions unless ``--format`` is given.

Files that are not sorted by contig, then by start position, cannot be indexed,
and stop the script with an error.
"""
import argparse
import inspect
import sys
import time

from regiontools.util.io.filters import NameDateWriter
from regiontools.util.io.openers import get_short_name
from regiontools.util.scriptlib.argparsers import ToolArgumentParser, BaseParser,\
                                                  IndexParser, print_configuration_info
from regiontools.util.scriptlib.help_formatters import format_module_docstring
from regiontools.genomics.genome_hash import IndexedGenomeHash
from regiontools.readers import READERS, get_reader_class

printer = NameDateWriter(get_short_name(inspect.stack()[-1][1]))


def main(argv=sys.argv[1:]):
    """Command-line program

    Parameters
    ----------
    argv : list, optional
        A list of command-line arguments, which will be processed
        as if the script were called from the command line if
        :func:`main` is called directly.

        Default: `sys.argv[1:]`. The command-line arguments, if the script is
        invoked from the command line
    """
    bp = BaseParser()
    ip = IndexParser()
    parser = ToolArgumentParser(description=format_module_docstring(__doc__),
                                formatter_class=argparse.RawDescriptionHelpFormatter,
                                parents=[bp.get_parser(),ip.get_parser()])
    parser.add_argument("--format",type=str.upper,default=None,choices=sorted(READERS),
                        help="Format of input files (Default: guess from file extension)")
    parser.add_argument("infiles",type=str,nargs="+",help="Sorted record files to index")
    args = parser.parse_args(argv)
    bp.get_base_ops_from_args(args)

    start_time = time.time()
    printer.write("Start with args: %s" % " ".join(argv))
    print_configuration_info(printer)

    try:
        for filename in args.infiles:
            try:
                reader_class = get_reader_class(filename,args.format)
            except ValueError as e:
                parser.error(str(e))

            with IndexedGenomeHash(filename,reader_class,printer=printer,
                                   **ip.get_index_options_from_args(args)) as records:
                printer.write("%s: %s records on %s contigs, bin size %s." % (filename,
                                                                              records.index.record_count,
                                                                              len(records.index),
                                                                              records.index.bin_size))
    except IOError as e:
        printer.write("Could not read input: %s" % e)
        sys.exit(1)

    printer.write("Done. Elapsed time %.3f seconds" % (time.time() - start_time))


if __name__ == "__main__":
    main()
