#!/usr/bin/env python
"""Select variants from a `VCF`_ file that fall within target regions listed
in a `BED`_ file.

The header of the input `VCF`_ file is written to the output, followed by
every variant that overlaps at least one target region. Each variant is
written once, in its original order, even if it overlaps several regions.
Variants that overlap any variant of the file given by ``--exclude`` (e.g.
known polymorphisms) are left out.

If a summary file is given, it receives a table with the number of variants
found in each target region:

    ========================  ==================================================
    **Name**                  **Definition**
    ------------------------  --------------------------------------------------
    `#name`                   Name of target region, from `BED`_ file

    `variant_count`           Number of variants overlapping the region
    ========================  ==================================================

Both input files must be sorted by contig, then by start position. Sidecar
indexes are created for them on first use. If no output file is given,
selected variants are written to the log.
"""
import argparse
import inspect
import sys
import time

from regiontools.util.io.filters import NameDateWriter
from regiontools.util.io.openers import get_short_name, open_output, NullWriter
from regiontools.util.scriptlib.argparsers import ToolArgumentParser, BaseParser,\
                                                  IndexParser, print_configuration_info
from regiontools.util.scriptlib.help_formatters import format_module_docstring
from regiontools.genomics.overlap import OverlapFilter, KEEP_IF_OVERLAP, DROP_IF_OVERLAP
from regiontools.readers.bed import BED_Reader
from regiontools.readers.vcf import VCF_Reader

printer = NameDateWriter(get_short_name(inspect.stack()[-1][1]))


def count_by_region(bed_filename,vcf_hash,fout):
    """Count variants overlapping each region of a `BED`_ file

    Parameters
    ----------
    bed_filename : str
        Name of `BED`_ file of target regions

    vcf_hash : |IndexedGenomeHash|
        Variants to count

    fout : file-like
        Output for summary table

    Returns
    -------
    int
        Number of regions
    """
    fout.write("#name\tvariant_count\n")
    n = 0
    with BED_Reader(bed_filename) as bed_reader:
        for feature in bed_reader:
            name = "." if feature.name is None else feature.name
            count = sum(1 for _ in vcf_hash.iter_overlapping_features(feature))
            printer.write("Found %s variants in region %s (%s:%s-%s)" % (count,name,feature.contig,feature.start,feature.end))
            fout.write("%s\t%s\n" % (name,count))
            n += 1

    return n

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
    parser.add_argument("--exclude",type=str,default=None,metavar="VCF",
                        help="Sorted VCF file of variants to exclude (e.g. dbSNP)")
    parser.add_argument("vcf_file",type=str,help="Sorted VCF file of variants")
    parser.add_argument("bed_file",type=str,help="Sorted BED file of target regions")
    parser.add_argument("outfile",type=str,nargs="?",default=None,
                        help="Output VCF filename (Default: write to log)")
    parser.add_argument("summary_file",type=str,nargs="?",default=None,
                        help="Output filename for count of variants per region (optional)")
    args = parser.parse_args(argv)
    bp.get_base_ops_from_args(args)

    start_time = time.time()
    printer.write("Start with args: %s" % " ".join(argv))
    print_configuration_info(printer)

    n_variants = 0
    n_regions  = 0
    try:
        with VCF_Reader(args.vcf_file) as vcf_reader,\
             ip.get_genome_hash_from_args(args,args.bed_file,reader_class=BED_Reader,printer=printer) as targets,\
             open_output(args.outfile,printer) as fout:

            fout.write(str(vcf_reader.vcf_header))
            records = OverlapFilter(targets,KEEP_IF_OVERLAP).filter(vcf_reader)
            if args.exclude is not None:
                excluded = ip.get_genome_hash_from_args(args,args.exclude,reader_class=VCF_Reader,printer=printer)
                records = OverlapFilter(excluded,DROP_IF_OVERLAP).filter(records)
            else:
                excluded = None

            try:
                for record in records:
                    fout.write(record.line)
                    n_variants += 1
                    if n_variants % 1000 == 0:
                        printer.write("Selected %s variants..." % n_variants)
            finally:
                if excluded is not None:
                    excluded.close()

        printer.write("Selected %s variants in target regions." % n_variants)

        with ip.get_genome_hash_from_args(args,args.vcf_file,reader_class=VCF_Reader,printer=printer) as vcf_hash:
            summary_out = NullWriter() if args.summary_file is None else open_output(args.summary_file,printer)
            with summary_out:
                n_regions = count_by_region(args.bed_file,vcf_hash,summary_out)
    except IOError as e:
        printer.write("Could not read input: %s" % e)
        sys.exit(1)

    printer.write("We saw %s record(s) in file %s" % (n_regions,args.bed_file))
    printer.write("Done. Elapsed time %.3f seconds" % (time.time() - start_time))


if __name__ == "__main__":
    main()
