"""Converters for serializing data sets.

Primary Classes:
    DataSetWriter: Writes the TRDP ``<data-set-list>`` XML document

Example:
-------
    >>> from typebridge.converters import DataSetWriter
    >>> DataSetWriter().write(result.datasets, Path("trdp-datasets.xml"))
"""

from typebridge.converters.dataset_writer import DataSetWriter

__all__ = ["DataSetWriter"]
