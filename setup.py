#!/usr/bin/env python
"""Setup script for regiontools. Command-line scripts are detected
automatically from the modules in `regiontools/bin`.
"""
import os
from setuptools import setup, find_packages

regiontools_version = "0.1.0"


#===============================================================================
# Package metadata
#===============================================================================

with open("README.rst") as f:
    long_description = f.read()

packages = find_packages()

install_requires = [
    "numpy>=1.9.4",
    "pysam>=0.8.4",
    "pandas>=0.17.0",
    "termcolor",
]

tests_require = [
    "pytest",
]


def get_scripts():
    """Detect command-line scripts automatically

    Returns
    -------
    list
        list of strings describing command-line scripts
    """
    binscripts = [
        X.replace(".py", "") for X in filter(
            lambda x: x.endswith(".py") and  "__init__" not in x,
            os.listdir(os.path.join("regiontools",  "bin")),
        )
    ]
    return ["%s = regiontools.bin.%s:main" % (X, X) for X in binscripts]



#===============================================================================
# Program body
#===============================================================================

setup(

    name             = "regiontools",
    version          = regiontools_version,
    long_description =  long_description,
    long_description_content_type = "text/x-rst",

    description      = "Interval-indexed queries over sorted BED, VCF, and SAM files, and targeted sequencing tools",
    license          = "BSD 3-Clause",
    keywords         = "genomics sequencing coverage variants vcf bed sam index",
    platforms        = "OS Independent",

    classifiers      = [
         'Development Status :: 3 - Alpha',
         'Programming Language :: Python :: 3',

         'Topic :: Scientific/Engineering :: Bio-Informatics',
         'Topic :: Software Development :: Libraries',

         'Intended Audience :: Science/Research',
         'Intended Audience :: Developers',

         'License :: OSI Approved :: BSD License',
         'Operating System :: POSIX',
         'Natural Language :: English',
    ],

    zip_safe = False,
    packages = packages,

    package_dir = {
        "regiontools"  : "regiontools",
    },

    entry_points = {
        "console_scripts" : get_scripts()
    },

    python_requires  = ">=3.6",
    install_requires = install_requires,
    extras_require   = {
        "test" : tests_require,
    },

) # yapf: disable
