"""Readers for sorted, line-oriented genomic record files.

Each reader opens a file in binary mode, parses its header, and yields
|Record| objects. Readers track the byte offset of each record, so that they
can be indexed by :mod:`regiontools.genomics.linear_index` and queried by
:mod:`regiontools.genomics.region_query`.

    ===========  ===============  ========================
    Format       Reader           Record type
    -----------  ---------------  ------------------------
    `BED`_       |BED_Reader|     |BedFeature|
    `VCF`_       |VCF_Reader|     |VariantRecord|
    `SAM`_       |SAM_Reader|     |AlignmentRecord|
    ===========  ===============  ========================
"""
import os
from regiontools.readers.bed import BED_Reader
from regiontools.readers.vcf import VCF_Reader
from regiontools.readers.sam import SAM_Reader

READERS = { "BED" : BED_Reader,
            "VCF" : VCF_Reader,
            "SAM" : SAM_Reader,
          }
"""Reader classes, keyed by file format"""

def get_reader_class(filename,fmt=None):
    """Choose a reader class for `filename`

    Parameters
    ----------
    filename : str
        Name of record file

    fmt : str or None, optional
        File format (`'BED'`, `'VCF'`, or `'SAM'`). If `None`, guessed from
        the extension of `filename`

    Returns
    -------
    class
        Subclass of |AbstractRecordReader|

    Raises
    ------
    ValueError
        if the format is unknown or cannot be guessed
    """
    if fmt is None:
        fmt = os.path.splitext(filename)[1].lstrip(".")

    try:
        return READERS[fmt.upper()]
    except KeyError:
        raise ValueError("Cannot determine format of '%s'. Expected one of: %s" % (filename,", ".join(sorted(READERS))))
