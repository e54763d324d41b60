"""Write TRDP data-set list documents.

Output layout::

    <?xml version='1.0' encoding='UTF-8'?>
    <data-set-list>
      <data-set name="Pkg_Point" id="1002">
        <element name="x" type="INT32"/>
        <element name="samples" array-size="16" type="REAL32"/>
      </data-set>
    </data-set-list>
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from pathlib import Path

from typebridge.ir.datasets import DataSet


class DataSetWriter:
    """Serialize data sets into the TRDP ``<data-set-list>`` XML format.

    Usage:
        writer = DataSetWriter()
        writer.write(datasets, Path("trdp-datasets.xml"))

    Or for in-memory conversion:
        xml_bytes = writer.write_bytes(datasets)
    """

    def __init__(self, indent: str = "  ") -> None:
        """Initialize the writer.

        Args:
        ----
            indent: Indentation per nesting level; empty for a single line.

        """
        self._indent = indent

    def build(self, datasets: Sequence[DataSet]) -> ET.Element:
        """Build the document tree.

        Args:
        ----
            datasets: Data sets in output order.

        Returns:
        -------
            The ``<data-set-list>`` element.

        """
        root = ET.Element("data-set-list")
        for dataset in datasets:
            dataset_node = ET.SubElement(root, "data-set")
            if dataset.name:
                dataset_node.set("name", dataset.name)
            dataset_node.set("id", dataset.export_id)

            for element in dataset.elements:
                element_node = ET.SubElement(dataset_node, "element")
                if element.name:
                    element_node.set("name", element.name)
                if element.array_size is not None:
                    element_node.set("array-size", str(element.array_size))
                element_node.set("type", element.type_ref)
        return root

    def write_bytes(self, datasets: Sequence[DataSet]) -> bytes:
        """Serialize data sets without writing to a file.

        Returns
        -------
            UTF-8 encoded document including the XML declaration.

        """
        tree = ET.ElementTree(self.build(datasets))
        if self._indent:
            ET.indent(tree, space=self._indent)
        data: bytes = ET.tostring(tree.getroot(), encoding="UTF-8", xml_declaration=True)
        return data + b"\n"

    def write(self, datasets: Sequence[DataSet], output_path: Path) -> None:
        """Write data sets to a file.

        Args:
        ----
            datasets: Data sets in output order.
            output_path: Output file path. Parent directories will be created.

        """
        data = self.write_bytes(datasets)

        # Ensure parent directory exists
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "wb") as f:
            f.write(data)
