#!/usr/bin/env python
"""Tools for reading and writing fixed-layout records in binary files

See Also
--------
:py:mod:`struct`
    Binary data structures in Python
"""
import struct
from collections import namedtuple

class BinaryParserFactory(object):
    """Parser factory for different types of binary records.

    Creates parsers that unpack binary byte streams into dictionaries
    that match field names to values, and pack dictionaries back into bytes.
    These parsers are most useful as components of binary file readers
    and writers, such as the sidecar index files in :mod:`regiontools.genomics.index_store`.

    Attributes
    ----------
    name : str
        Human-readable name for parser

    fmt : str
        String specifying binary format of data, as specified in :py:mod:`struct`

    fields : list
        List of strings specifying variable names to bind to data
        when unpacked from a binary file, in same order as items in ``fmt``

    nt : :class:`~collections.namedtuple`
        A :class:`~collections.namedtuple` instance that will provide names
        to the unpacked data


    Examples
    --------
    A binary RGB color parser::

        >>> ColorParser = BinaryParserFactory("ColorParser","3B",["r","g","b"])
        >>> fh = open("some_binary_file_containing_colors.bin","rb")
        >>> fh.seek(byte_location_of_an_rgb_color)
        >>> ColorParser(fh)
            { "r" : 255,
              "g" : 0,
              "b" : 52 }
    """

    def __init__(self,name,fmt,fields):
        """Create a |BinaryParserFactory|

        Parameters
        ----------
        name : str
            Name for parser

        fmt : str
            String specifying binary format of data. See :py:mod:`struct`

        fields : list
            Ordered list of field names to bind to data unpacked from binary file
        """
        self.name   = name
        self.fmt    = fmt
        self.fields = fields
        self.nt = namedtuple(name,fields)

    def __str__(self):
        return "<%s fmt='%s' fields='%s'>" % (self.name,self.fmt,",".join(self.fields))

    def __repr__(self):
        return str(self)

    def __call__(self,fh,byte_order="<"):
        """Parse data from `fh` into a dictionary mapping field names to their values

        Parameters
        ----------
        fh : byte stream
            File-like pointing to binary data. Pointer in file must be
            aligned with start of record.

        byte_order : str
            Character indicating endian-ness of data (default: `'<'` for little-endian)

        Returns
        -------
        dict
            Dictionary mapping field names from `self.fields` to their values

        Raises
        ------
        struct.error
            if fewer bytes than a full record remain in `fh`
        """
        tmp_dict = self.nt._make(struct.unpack(byte_order+self.fmt,
                                               fh.read(self.calcsize(byte_order))))._asdict()
        for k in tmp_dict:
            if isinstance(tmp_dict[k],bytes):
                tmp_dict[k] = tmp_dict[k].decode("ascii")

        return dict(tmp_dict)

    def pack(self,values,byte_order="<"):
        """Pack a dictionary of field values into bytes, in the order given by `self.fields`

        Parameters
        ----------
        values : dict
            Dictionary mapping each name in `self.fields` to a value

        byte_order : str
            Character indicating endian-ness of data (default: `'<'` for little-endian)

        Returns
        -------
        bytes
        """
        ltmp = []
        for field in self.fields:
            val = values[field]
            if isinstance(val,str):
                val = val.encode("ascii")
            ltmp.append(val)

        return struct.pack(byte_order+self.fmt,*ltmp)

    def calcsize(self,byte_order="<"):
        """Return calculated size, in bytes, of record

        Parameters
        ----------
        byte_order : str
            Character indicating endian-ness of data (default: `'<'` for little-endian)

        Returns
        -------
        int
            Calculated size of record, in bytes
        """
        return struct.calcsize(byte_order+self.fmt)
