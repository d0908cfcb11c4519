#!/usr/bin/env python
"""Function decorators, exceptions, and warnings

Package overview
================

    ===================================================  ==============================================
    **Package module**                                   **Contents**
    ---------------------------------------------------  ----------------------------------------------
    :py:mod:`~regiontools.util.services.decorators`       Function decorators
    :py:mod:`~regiontools.util.services.exceptions`       Exceptions, warnings and warning filters
    ===================================================  ==============================================

"""
