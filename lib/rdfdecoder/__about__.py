# PyRDFDecoder metadata
__all__ = [
    '__copyright__', '__license__', '__version__'
]

__copyright__ = 'Copyright (c) 2024 The PyRDFDecoder authors'
__license__ = 'BSD 3-Clause license'
__version__ = '0.3.0'
