"""
Python integer kernels.

`wide` holds exact 512-bit products of 256-bit words, tagged by the units of
their factors so that only matching shapes combine.
"""
