#!/usr/bin/env python
"""Remove from one `VCF`_ file every variant that overlaps a variant of a
second `VCF`_ file.

The header of the first file is written to the output, followed by each of
its variants that overlaps no variant of the second file, in their original
order. The second file must be sorted by contig, then by start position, and
is indexed by a sidecar file on first use. If no output file is given,
remaining variants are written to the log.
"""
import argparse
import inspect
import sys
import time

from regiontools.util.io.filters import NameDateWriter
from regiontools.util.io.openers import get_short_name, open_output
from regiontools.util.scriptlib.argparsers import ToolArgumentParser, BaseParser,\
                                                  IndexParser, print_configuration_info
from regiontools.util.scriptlib.help_formatters import format_module_docstring
from regiontools.genomics.overlap import filter_by_overlap, DROP_IF_OVERLAP
from regiontools.readers.vcf import VCF_Reader

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
    parser.add_argument("vcf_a",type=str,help="VCF file of variants to filter")
    parser.add_argument("vcf_b",type=str,help="Sorted VCF file of variants to subtract")
    parser.add_argument("outfile",type=str,nargs="?",default=None,
                        help="Output VCF filename (Default: write to log)")
    args = parser.parse_args(argv)
    bp.get_base_ops_from_args(args)

    start_time = time.time()
    printer.write("Start with args: %s" % " ".join(argv))
    print_configuration_info(printer)

    n_kept = 0
    try:
        with VCF_Reader(args.vcf_a) as vcf_reader,\
             ip.get_genome_hash_from_args(args,args.vcf_b,reader_class=VCF_Reader,printer=printer) as subtrahend,\
             open_output(args.outfile,printer) as fout:

            fout.write(str(vcf_reader.vcf_header))
            records = filter_by_overlap(vcf_reader,subtrahend.index,subtrahend.reader,DROP_IF_OVERLAP)
            for record in records:
                fout.write(record.line)
                n_kept += 1
                if n_kept % 1000 == 0:
                    printer.write("Kept %s variants..." % n_kept)
    except IOError as e:
        printer.write("Could not read input: %s" % e)
        sys.exit(1)

    printer.write("Kept %s variants not found in %s." % (n_kept,args.vcf_b))
    printer.write("Done. Elapsed time %.3f seconds" % (time.time() - start_time))


if __name__ == "__main__":
    main()
