#!/usr/bin/env python
"""Calculate depth of coverage of :term:`read alignments <alignment>` over
target regions listed in a `BED`_ file.

Alignments may be given as a sorted `BAM`_ file with a `.bai` index, or as
a sorted `SAM`_ file, which is indexed by a sidecar file on first use.
Alignments that are secondary, fail vendor quality checks, are unmapped,
are marked as duplicates, or have a mapping quality of zero are ignored.

Results are output as a table with the following columns:

    ========================  ==================================================
    **Name**                  **Definition**
    ------------------------  --------------------------------------------------
    `chr`                     Contig of region

    `start`                   First position of region (1-based, inclusive)

    `end`                     Last position of region (1-based, inclusive)

    `name`                    Name of region, from `BED`_ file

    `length`                  Region length, in nucleotides

    `coverage`                Number of reads overlapping the region, divided
                              by region length

    `totalBases0X`            Number of positions covered by no reads

    `totalBases10X`           Number of positions covered by at least 10 reads.
                              The threshold, and the column name, change with
                              ``--threshold``
    ========================  ==================================================

Regions on contigs absent from the alignment file are skipped, with a warning.
If no output file is given, the table is written to the log.
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
from regiontools.util.services.exceptions import MissingContigWarning, DataWarning, warn
from regiontools.genomics.roitools import Region
from regiontools.genomics.coverage import accumulate, DEFAULT_THRESHOLD
from regiontools.genomics.read_filters import filter_read
from regiontools.readers.bed import BED_Reader
from regiontools.readers.sam import SAM_Reader

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
    parser.add_argument("--threshold",type=int,default=DEFAULT_THRESHOLD,metavar="N",
                        help="Minimum depth counted in the last column of output (Default: %s)" % DEFAULT_THRESHOLD)
    parser.add_argument("bed_file",type=str,help="Sorted BED file of target regions")
    parser.add_argument("alignment_file",type=str,help="Sorted, indexed BAM file, or sorted SAM file")
    parser.add_argument("outfile",type=str,nargs="?",default=None,
                        help="Output filename (Default: write to log)")
    args = parser.parse_args(argv)
    bp.get_base_ops_from_args(args)

    start_time = time.time()
    printer.write("Start with args: %s" % " ".join(argv))
    print_configuration_info(printer)

    total_reads = 0
    n = 0
    try:
        with BED_Reader(args.bed_file) as bed_reader,\
             ip.get_genome_hash_from_args(args,args.alignment_file,reader_class=SAM_Reader,printer=printer) as alignments,\
             open_output(args.outfile,printer) as fout:

            chroms = alignments.chroms()
            fout.write("chr\tstart\tend\tname\tlength\tcoverage\ttotalBases0X\ttotalBases%sX\n" % args.threshold)
            for feature in bed_reader:
                if n % 1000 == 0 and n > 0:
                    printer.write("Processed %s regions..." % n)

                if feature.contig not in chroms:
                    msg = "Contig '%s' of region %s:%s-%s is not in the sequence dictionary of '%s'. Skipping." % (feature.contig,
                            feature.contig,feature.start,feature.end,args.alignment_file)
                    printer.write(msg)
                    warn(msg,MissingContigWarning)
                    continue

                if feature.end < feature.start:
                    warn("Region '%s' at %s:%s has zero length. Skipping." % (feature.name,feature.contig,feature.start),
                         DataWarning)
                    continue

                region  = Region(feature.contig,feature.start,feature.end)
                summary = accumulate(region,
                                     alignments.iter_overlapping_features(region),
                                     filter_func=filter_read,
                                     threshold=args.threshold)
                ltmp = [feature.contig,
                        str(feature.start),
                        str(feature.end),
                        "." if feature.name is None else feature.name,
                        str(summary.length),
                        str(summary.mean_coverage),
                        str(summary.zero_coverage_bases),
                        str(summary.threshold_coverage_bases)]
                fout.write("%s\n" % "\t".join(ltmp))

                total_reads += summary.read_count
                n += 1
    except IOError as e:
        printer.write("Could not read input: %s" % e)
        sys.exit(1)

    printer.write("Found %s reads spanning %s BED features" % (total_reads,n))
    printer.write("Done. Elapsed time %.3f seconds" % (time.time() - start_time))


if __name__ == "__main__":
    main()
