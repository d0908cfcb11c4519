#!/usr/bin/env python
"""Persistence of |LinearIndex| objects as sidecar files

A record file named `foo.vcf` is indexed by a sidecar file named `foo.vcf.idx`.
Sidecars are created the first time a file is opened for region queries, and
read directly afterwards. By default, a sidecar is never checked against the
file it indexes, so a sidecar left behind after its record file has changed
silently gives wrong answers. Pass `check_freshness=True` to
:func:`load_or_build` to rebuild sidecars whose recorded source size or
modification time no longer match.

Sidecars are written to a temporary file in the same directory and then renamed
into place, so readers never see a partial file. When several processes build
the same sidecar at once, the last rename wins.


Binary layout
-------------
All integers are little-endian::

    header     : magic "RTLX" | version (uint16) | bin_size (uint32)
                 | source_size (uint64) | source_mtime_ns (int64) | n_contigs (uint32)

    per contig : name_length (uint16) | name (utf-8)
                 | record_count (uint64) | min_bin (uint32) | max_bin (uint32)
                 | first_offset (uint64) | longest_record (uint32) | n_bins (uint32)
                 | n_bins x ( bin (uint32) | offset (uint64) )

Contigs appear in the order in which they appear in the record file.
"""
import os
import struct
import tempfile

from regiontools.util.io.binary import BinaryParserFactory
from regiontools.util.io.openers import NullWriter
from regiontools.util.services.exceptions import MalformedFileError, IndexPersistenceError,\
                                                 FileFormatWarning, IndexPersistenceWarning, warn
from regiontools.genomics.linear_index import LinearIndex, ContigIndex, build_index, DEFAULT_BIN_SIZE

INDEX_MAGIC   = "RTLX"
INDEX_VERSION = 1
INDEX_SUFFIX  = ".idx"

IndexHeaderFactory = BinaryParserFactory("IndexHeader","4sHIQqI",
                                         ["magic",
                                          "version",
                                          "bin_size",
                                          "source_size",
                                          "source_mtime_ns",
                                          "n_contigs"])

ContigNameLengthFactory = BinaryParserFactory("ContigNameLength","H",["name_length"])

ContigHeaderFactory = BinaryParserFactory("ContigHeader","QIIQII",
                                          ["record_count",
                                           "min_bin",
                                           "max_bin",
                                           "first_offset",
                                           "longest_record",
                                           "n_bins"])

BinEntryFactory = BinaryParserFactory("BinEntry","IQ",["bin","offset"])


def get_index_filename(filename):
    """Return the name of the sidecar index file for `filename`

    Parameters
    ----------
    filename : str
        Name of record file

    Returns
    -------
    str
    """
    return filename + INDEX_SUFFIX

def get_source_stats(filename):
    """Return size, in bytes, and modification time, in nanoseconds, of `filename`

    Returns
    -------
    tuple
        (`size`, `mtime_ns`)
    """
    stat = os.stat(filename)
    return stat.st_size, stat.st_mtime_ns

def get_umask():
    """Return the file mode creation mask of the current process"""
    umask = os.umask(0)
    os.umask(umask)
    return umask

def _pack_index(index):
    ltmp = [IndexHeaderFactory.pack({ "magic"           : INDEX_MAGIC,
                                      "version"         : INDEX_VERSION,
                                      "bin_size"        : index.bin_size,
                                      "source_size"     : index.source_size,
                                      "source_mtime_ns" : index.source_mtime_ns,
                                      "n_contigs"       : len(index),
                                    })]
    for contig in index.contigs.values():
        name = contig.name.encode("utf-8")
        ltmp.append(ContigNameLengthFactory.pack({ "name_length" : len(name) }))
        ltmp.append(name)
        ltmp.append(ContigHeaderFactory.pack({ "record_count"   : contig.record_count,
                                               "min_bin"        : contig.min_bin,
                                               "max_bin"        : contig.max_bin,
                                               "first_offset"   : contig.first_offset,
                                               "longest_record" : contig.longest_record,
                                               "n_bins"         : len(contig.bins),
                                             }))
        for bin_, offset in zip(contig.bins,contig.offsets):
            ltmp.append(BinEntryFactory.pack({ "bin" : bin_, "offset" : offset }))

    return b"".join(ltmp)

def write_index(index,index_filename):
    """Write `index` to `index_filename`, atomically replacing any file already there

    Parameters
    ----------
    index : |LinearIndex|
        Index to write

    index_filename : str
        Name of sidecar file

    Raises
    ------
    |IndexPersistenceError|
        if the sidecar cannot be written
    """
    try:
        data = _pack_index(index)
    except struct.error as e:
        raise IndexPersistenceError(index_filename,"index values do not fit sidecar format: %s" % e)

    dirname = os.path.dirname(os.path.abspath(index_filename))
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(dir=dirname,
                                        prefix=".%s." % os.path.basename(index_filename),
                                        suffix=".tmp")
        with os.fdopen(fd,"wb") as fout:
            fout.write(data)
            fout.flush()
            os.fsync(fout.fileno())

        # mkstemp creates files readable only by their owner
        os.chmod(tmp_name,0o666 & ~get_umask())
        os.replace(tmp_name,index_filename)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise IndexPersistenceError(index_filename,e)

def read_index(index_filename):
    """Read a |LinearIndex| from a sidecar file

    Parameters
    ----------
    index_filename : str
        Name of sidecar file

    Returns
    -------
    |LinearIndex|

    Raises
    ------
    |MalformedFileError|
        if the file is not a sidecar index, uses an unsupported version,
        or is truncated
    """
    with open(index_filename,"rb") as fh:
        try:
            header = IndexHeaderFactory(fh)
            if header["magic"] != INDEX_MAGIC:
                raise MalformedFileError(index_filename,"Not a sidecar index file (bad magic number).")
            if header["version"] != INDEX_VERSION:
                raise MalformedFileError(index_filename,"Unsupported index version %s." % header["version"])

            index = LinearIndex(bin_size=header["bin_size"],
                                source_size=header["source_size"],
                                source_mtime_ns=header["source_mtime_ns"])
            for _ in range(header["n_contigs"]):
                name_length = ContigNameLengthFactory(fh)["name_length"]
                name_bytes  = fh.read(name_length)
                if len(name_bytes) < name_length:
                    raise MalformedFileError(index_filename,"Index file is truncated.")

                name = name_bytes.decode("utf-8")
                cheader = ContigHeaderFactory(fh)
                bins    = []
                offsets = []
                for _ in range(cheader["n_bins"]):
                    entry = BinEntryFactory(fh)
                    bins.append(entry["bin"])
                    offsets.append(entry["offset"])

                contig = ContigIndex(name,cheader["first_offset"],
                                     bins=bins,
                                     offsets=offsets,
                                     record_count=cheader["record_count"],
                                     longest_record=cheader["longest_record"])
                if contig.min_bin != cheader["min_bin"] or contig.max_bin != cheader["max_bin"]:
                    raise MalformedFileError(index_filename,"Bin range of contig '%s' does not match its entries." % name)

                index.contigs[name] = contig
        except (struct.error,UnicodeDecodeError,ValueError) as e:
            raise MalformedFileError(index_filename,"Index file is truncated or corrupt: %s" % e)

        if fh.read(1) != b"":
            raise MalformedFileError(index_filename,"Unexpected data after last contig.")

    return index

def is_fresh(index,filename):
    """Test whether the source size and modification time recorded in `index`
    match the current state of `filename`

    Parameters
    ----------
    index : |LinearIndex|

    filename : str
        Name of record file

    Returns
    -------
    bool
    """
    return (index.source_size,index.source_mtime_ns) == get_source_stats(filename)

def load_or_build(filename,source,bin_size=DEFAULT_BIN_SIZE,rebuild=False,
                  check_freshness=False,printer=None):
    """Load the sidecar index of `filename`, building and saving it if needed

    Parameters
    ----------
    filename : str
        Name of record file

    source : |AbstractRecordReader| or iterable
        Record source for `filename`, used only if the index must be built.
        See :func:`~regiontools.genomics.linear_index.build_index`

    bin_size : int, optional
        Bin width used if the index must be built. An existing sidecar keeps
        the bin width it was built with. (Default: |DEFAULT_BIN_SIZE|)

    rebuild : bool, optional
        If `True`, ignore any existing sidecar (Default: `False`)

    check_freshness : bool, optional
        If `True`, rebuild sidecars whose recorded source size or modification
        time differ from those of `filename` (Default: `False`)

    printer : file-like, optional
        Logger. (Default: :class:`~regiontools.util.io.openers.NullWriter`)

    Returns
    -------
    |LinearIndex|

    Raises
    ------
    |MalformedSourceError|
        if `filename` is not sorted. No sidecar is written.
    """
    if printer is None:
        printer = NullWriter()

    index_filename = get_index_filename(filename)
    if not rebuild and os.path.exists(index_filename):
        try:
            index = read_index(index_filename)
        except (MalformedFileError,OSError) as e:
            warn("Could not parse index file '%s' (%s). Rebuilding." % (index_filename,e),
                 FileFormatWarning)
        else:
            if not check_freshness or is_fresh(index,filename):
                printer.write("Using index file '%s'." % index_filename)
                return index

            printer.write("Index file '%s' is out of date." % index_filename)

    printer.write("Indexing '%s' with bin size %s..." % (filename,bin_size))
    size, mtime_ns = get_source_stats(filename)
    index = build_index(source,bin_size=bin_size,filename=filename)
    index.source_size = size
    index.source_mtime_ns = mtime_ns
    printer.write("Indexed %s records on %s contigs." % (index.record_count,len(index)))

    try:
        write_index(index,index_filename)
        printer.write("Saved index to '%s'." % index_filename)
    except IndexPersistenceError as e:
        warn("Could not save index for '%s' (%s). Using index in memory." % (filename,e.reason),
             IndexPersistenceWarning)

    return index
