"""Configuration model for the type bridge."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from typebridge.ir.types import EXPORT_ID_MAX_LENGTH, TrdpDataType


class BridgeConfig(BaseModel):
    """Settings of one bridge run.

    Example:
    -------
        ```yaml
        size_maps_to: UINT32
        numeric_type_ids: true
        required_only: false
        ```

    """

    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    max_type_ids: Annotated[
        int,
        Field(
            default=0x4000,
            ge=2,
            le=1_000_000,
            description="Upper bound (exclusive) of model ids",
        ),
    ]
    dataset_id_offset: Annotated[
        int,
        Field(
            default=1000,
            ge=0,
            description="Added to the model id to synthesize data-set ids",
        ),
    ]
    size_maps_to: Annotated[
        str,
        Field(
            default="INT32",
            description="TRDP scalar used for the model's 'size' type",
        ),
    ]
    numeric_type_ids: Annotated[
        bool,
        Field(
            default=False,
            description="Emit scalar types as TRDP numbers ('6') instead of names ('INT32')",
        ),
    ]
    max_name_length: Annotated[
        int,
        Field(default=30, ge=1, description="Maximum length of data-set names"),
    ]
    name_separator: Annotated[
        str,
        Field(default="_", max_length=1, description="Joins package path and type name"),
    ]
    max_array_length: Annotated[
        int,
        Field(default=0xFFFF, ge=1, description="Largest accepted array length"),
    ]
    max_reference_depth: Annotated[
        int,
        Field(default=256, ge=1, description="Longest reference chain followed"),
    ]
    required_only: Annotated[
        bool,
        Field(
            default=True,
            description="Only export data sets reachable from the operator parameters",
        ),
    ]

    @field_validator("size_maps_to")
    @classmethod
    def _check_trdp_type(cls, value: str) -> str:
        name = value.upper()
        if name not in TrdpDataType.__members__:
            raise ValueError(
                f"Unknown TRDP type '{value}', use one of: {', '.join(TrdpDataType.__members__)}"
            )
        return name

    @model_validator(mode="after")
    def validate_export_id_length(self) -> BridgeConfig:
        """Validate that every synthesized data-set id fits the export id length."""
        largest = str(self.synthesized_id(self.max_type_ids - 1))
        if len(largest) > EXPORT_ID_MAX_LENGTH:
            raise ValueError(
                f"dataset_id_offset + max_type_ids gives data-set id {largest}, "
                f"longer than {EXPORT_ID_MAX_LENGTH} characters"
            )
        return self

    @property
    def size_type(self) -> TrdpDataType:
        """TRDP scalar the 'size' predefined type degrades to."""
        return TrdpDataType[self.size_maps_to]

    def synthesized_id(self, type_id: int) -> int:
        """Data-set id for a user-defined type."""
        return self.dataset_id_offset + type_id

    def scalar_export_id(self, data_type: TrdpDataType) -> str:
        """Export id for a TRDP scalar."""
        return str(data_type.value) if self.numeric_type_ids else data_type.name
