"""
Kernel layer.

`reflectmath/kernels/python/` holds the integer kernels the conversion engine is
built on. They know nothing about tokens: only words, products and divisions.
"""
