"""Declaration records read from the model compiler's type dictionary.

Ids are kept as read; range checks happen on registration.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PredefinedTypeDecl:
    """``<predefType id="%id" name="int32"/>``."""

    type_id: int
    name: str | None


@dataclass(frozen=True)
class ArrayDecl:
    """``<array id="%id" baseType="%id" size="n"/>``."""

    type_id: int
    base_type_id: int
    length: int


@dataclass(frozen=True)
class FieldDecl:
    """``<field id="%id" name="fieldname" type="%id"/>`` inside a struct."""

    type_id: int
    name: str | None
    field_type_id: int


@dataclass(frozen=True)
class StructDecl:
    """``<struct id="%id">`` with its fields in declaration order."""

    type_id: int
    fields: tuple[FieldDecl, ...] = ()


@dataclass(frozen=True)
class TypeAliasDecl:
    """``<type id="%id" name="Name" type="%id"/>``, optionally inside packages.

    Attributes
    ----------
        type_id: Id of the new (alias) type.
        aliased_type_id: Id of the named type.
        name: Local name of the alias.
        package_path: Enclosing package names, outermost first.

    """

    type_id: int
    aliased_type_id: int
    name: str | None = None
    package_path: tuple[str, ...] = ()

    def package_prefix(self, separator: str = "_") -> str | None:
        """Join the package path, None at model level."""
        if not self.package_path:
            return None
        return separator.join(self.package_path)


Declaration = PredefinedTypeDecl | ArrayDecl | StructDecl | TypeAliasDecl


@dataclass(frozen=True)
class OperatorParameter:
    """``<input>`` or ``<output>`` of an operator; type_id is None if unreadable."""

    name: str | None
    type_id: int | None
