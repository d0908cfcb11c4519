#!/usr/bin/env python
"""Miscellaneous, general utilities useful for scripting

Package overview
================

    =======================================   ==============================================================================
    **Subpackages**                           **Contents**
    ---------------------------------------   ------------------------------------------------------------------------------
    :py:obj:`~regiontools.util.io`             Wrappers for file I/O: log printers, file openers, binary record parsers
    :py:obj:`~regiontools.util.scriptlib`      Tools for writing command-line scripts that use :data:`regiontools`
    :py:obj:`~regiontools.util.services`       Function decorators, exceptions and warnings
    =======================================   ==============================================================================
"""
