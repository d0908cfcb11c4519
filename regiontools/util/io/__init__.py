#!/usr/bin/env python
"""Utilities for handling and wrapping various I/O operations.

Package overview
================

    ===========================================  ======================================
    **Package module**                           **Contents**
    -------------------------------------------  --------------------------------------
    :py:mod:`~regiontools.util.io.binary`         Tools for unpacking binary values
                                                 into named dictionaries
    :py:mod:`~regiontools.util.io.filters`        Writers that transform output
                                                 before it reaches a stream (e.g.
                                                 prepend program name and time)
    :py:mod:`~regiontools.util.io.openers`        Wrappers for opening and closing files
    ===========================================  ======================================

"""
