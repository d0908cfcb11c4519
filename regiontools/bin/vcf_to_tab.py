#!/usr/bin/env python
"""Convert a `VCF`_ file to a tab-delimited table, with one row per variant.

The table has the following columns:

    ==============================  ============================================
    **Name**                        **Definition**
    ------------------------------  --------------------------------------------
    `CHROM`, `POS`, `ID`, `REF`     As in the `VCF`_ file

    `ALT`                           Alternate alleles, separated by commas

    `QUAL`                          Quality, or `.` if missing

    `FILTER`                        Filters that the variant failed, separated
                                    by commas. Empty for passing or unfiltered
                                    variants

    one column per INFO field       Value of each INFO field declared in the
                                    header, in order of declaration. Flags are
                                    written as `true`. Empty if absent

    `<sample>-<key>`                For each sample, and each FORMAT field
                                    declared in the header, the sample's value.
                                    Genotypes (`GT`) are written as bases, e.g.
                                    `A/G`, or `A|G` if phased. Empty if absent
    ==============================  ============================================
"""
import argparse
import inspect
import re
import sys
import time

from regiontools.util.io.filters import NameDateWriter
from regiontools.util.io.openers import get_short_name, opener
from regiontools.util.scriptlib.argparsers import ToolArgumentParser, BaseParser,\
                                                  print_configuration_info
from regiontools.util.scriptlib.help_formatters import format_module_docstring
from regiontools.util.services.exceptions import DataWarning, warn
from regiontools.readers.vcf import VCF_Reader

printer = NameDateWriter(get_short_name(inspect.stack()[-1][1]))

_allele_sep = re.compile(r"[/|]")

def format_genotype(gt,record):
    """Convert a `VCF`_ genotype of allele indices (e.g. `'0/1'`) to bases (e.g. `'A/G'`)

    Parameters
    ----------
    gt : str
        Value of `GT` field

    record : |VariantRecord|
        Variant to which genotype belongs

    Returns
    -------
    str
        Bases of each allele, joined by `'|'` if phased or `'/'` otherwise.
        No-calls are written as `'.'`
    """
    alleles = [record.ref] + record.alt
    bases = []
    for idx in _allele_sep.split(gt):
        if idx in (".",""):
            bases.append(".")
        else:
            bases.append(alleles[int(idx)])

    sep = "|" if "|" in gt else "/"
    return sep.join(bases)

def format_info(record,info_ids):
    """Return INFO values of `record` for each ID in `info_ids`"""
    ltmp = []
    for key in info_ids:
        val = record.info.get(key)
        if val is None:
            ltmp.append("")
        elif val is True:
            ltmp.append("true")
        else:
            ltmp.append(val)

    return ltmp

def format_samples(record,format_ids):
    """Return per-sample values of `record`, for each sample, then each FORMAT ID"""
    ltmp = []
    for sample_values in record.samples:
        values = dict(zip(record.format,sample_values))
        for key in format_ids:
            val = values.get(key,"")
            if key == "GT" and val not in ("","."):
                val = format_genotype(val,record)
            elif val == ".":
                val = ""
            ltmp.append(val)

    return ltmp

def format_row(record,info_ids,format_ids):
    """Format `record` as a row of the output table

    Parameters
    ----------
    record : |VariantRecord|

    info_ids : list
        INFO IDs declared in header

    format_ids : list
        FORMAT IDs declared in header

    Returns
    -------
    str
    """
    filters = [X for X in record.filters if X != "PASS"]
    ltmp = [record.contig,
            str(record.start),
            record.id,
            record.ref,
            ",".join(record.alt),
            "." if record.qual is None else str(record.qual),
            ",".join(filters)]
    ltmp.extend(format_info(record,info_ids))
    ltmp.extend(format_samples(record,format_ids))
    return "\t".join(ltmp) + "\n"

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
    parser = ToolArgumentParser(description=format_module_docstring(__doc__),
                                formatter_class=argparse.RawDescriptionHelpFormatter,
                                parents=[bp.get_parser()])
    parser.add_argument("vcf_file",type=str,help="Input VCF file")
    parser.add_argument("outfile",type=str,help="Output filename")
    args = parser.parse_args(argv)
    bp.get_base_ops_from_args(args)

    start_time = time.time()
    printer.write("Start with args: %s" % " ".join(argv))
    print_configuration_info(printer)

    n = 0
    try:
        with VCF_Reader(args.vcf_file) as reader, opener(args.outfile,"w") as fout:
            header     = reader.vcf_header
            info_ids   = header.info_ids
            format_ids = header.format_ids
            declared   = set(info_ids)

            ltmp = ["CHROM","POS","ID","REF","ALT","QUAL","FILTER"]
            ltmp.extend(info_ids)
            for sample in header.samples:
                ltmp.extend("%s-%s" % (sample,X) for X in format_ids)
            fout.write("\t".join(ltmp) + "\n")

            for record in reader:
                for key in record.info:
                    if key not in declared:
                        warn("INFO field '%s' at %s:%s is not declared in the header of '%s'. Ignoring." % (key,record.contig,record.start,args.vcf_file),
                             DataWarning)

                fout.write(format_row(record,info_ids,format_ids))
                n += 1
                if n % 1000 == 0:
                    printer.write("Processed %s variants..." % n)
    except IOError as e:
        printer.write("Could not read input: %s" % e)
        sys.exit(1)

    printer.write("Wrote %s variants to %s." % (n,args.outfile))
    printer.write("Done. Elapsed time %.3f seconds" % (time.time() - start_time))


if __name__ == "__main__":
    main()
