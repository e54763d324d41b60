"""typebridge: Maps SCADE model I/O types onto TRDP data-set descriptions.

This package provides tools for:
- Reading the type dictionary (mapping.xml) generated by the KCG code generator
- Resolving the types used by an operator's inputs and outputs
- Writing them as a TRDP data-set list (XML)

Quick Start:
    >>> from typebridge.models import load_mapping
    >>> from typebridge.transform import TypeBridge
    >>> from typebridge.converters import DataSetWriter
    >>>
    >>> result = TypeBridge().run(load_mapping(Path("mapping.xml")))
    >>> DataSetWriter().write(result.datasets, Path("trdp-datasets.xml"))

Modules:
    models: Configuration model and file loaders
    mapping: mapping.xml reader
    catalog: Type catalog, registration, reachability and flattening
    transform: The end-to-end bridge
    converters: Data-set list writer
    diagnostics: Reported conditions
    ir: Intermediate Representation data structures
    cli: Command-line interface
"""

__version__ = "0.1.0"
