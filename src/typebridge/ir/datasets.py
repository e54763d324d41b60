"""IR models for the exported TRDP data sets."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Element:
    """One element of a data set.

    Attributes
    ----------
        type_ref: Export id of the element's ultimate type (scalar or data set).
        name: Field name, if declared.
        array_size: Length of the (first) array dimension, None for non-arrays.

    """

    type_ref: str
    name: str | None = None
    array_size: int | None = None


@dataclass(frozen=True)
class DataSet:
    """A TRDP data set built from one struct root."""

    export_id: str
    name: str | None = None
    elements: tuple[Element, ...] = field(default_factory=tuple)
