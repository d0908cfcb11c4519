#!/usr/bin/env python
"""Library components for writing command-line scripts

Package overview
================

    =====================================================    =========================
    **Package module**                                       **Contents**
    -----------------------------------------------------    -------------------------
    :py:mod:`~regiontools.util.scriptlib.argparsers`          :class:`~argparse.ArgumentParser` factories for record files, index options and logging
    :py:mod:`~regiontools.util.scriptlib.help_formatters`     Utilities to reformat module docstrings for use as command-line help text
    =====================================================    =========================
"""
