"""
Pydantic models for declarative pipelines.

A pipeline is described as an ordered list of operations, validated here and
turned into a cursor chain by ``lazyseq.utils.build_pipeline``.
"""

from typing import Any, List, Optional
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class OperationType(str, Enum):
    """Supported pipeline operations"""
    DROP = "drop"
    TAKE = "take"
    MAP = "map"
    FILTER = "filter"
    FILTER_EQ = "filter_eq"
    FILTER_NEQ = "filter_neq"
    UNTIL = "until"
    UNTIL_EQ = "until_eq"
    UNTIL_NEQ = "until_neq"
    TAKE_WHILE = "take_while"
    TAKE_WHILE_EQ = "take_while_eq"
    TAKE_WHILE_NEQ = "take_while_neq"


COUNT_OPERATIONS = {OperationType.DROP, OperationType.TAKE}
FUNCTION_OPERATIONS = {
    OperationType.MAP,
    OperationType.FILTER,
    OperationType.UNTIL,
    OperationType.TAKE_WHILE,
}
VALUE_OPERATIONS = {
    OperationType.FILTER_EQ,
    OperationType.FILTER_NEQ,
    OperationType.UNTIL_EQ,
    OperationType.UNTIL_NEQ,
    OperationType.TAKE_WHILE_EQ,
    OperationType.TAKE_WHILE_NEQ,
}


class OperationSpec(BaseModel):
    """A single pipeline stage"""
    type: OperationType = Field(..., description="Operation to apply")
    count: Optional[int] = Field(
        None,
        description="Element count for drop/take",
        ge=0
    )
    function: Optional[str] = Field(
        None,
        description="Name of a registered function for map/filter/until/take_while"
    )
    value: Optional[Any] = Field(
        None,
        description="Comparison value for the *_eq / *_neq operations"
    )

    @model_validator(mode='after')
    def validate_arguments(self):
        """Each operation type requires its own argument."""
        if self.type in COUNT_OPERATIONS and self.count is None:
            raise ValueError(f"{self.type.value} requires count")
        if self.type in FUNCTION_OPERATIONS and not self.function:
            raise ValueError(f"{self.type.value} requires function")
        if self.type in VALUE_OPERATIONS and "value" not in self.model_fields_set:
            raise ValueError(f"{self.type.value} requires value")
        return self


class PipelineSpec(BaseModel):
    """Source window plus the ordered list of operations"""
    operations: List[OperationSpec] = Field(
        default_factory=list,
        description="Operations applied in order"
    )
    begin: int = Field(0, description="First source index (sequences only)", ge=0)
    end: Optional[int] = Field(
        None,
        description="One past the last source index (sequences only)",
        ge=0
    )
    measure_memory: bool = Field(
        True,
        description="Trace peak memory with tracemalloc while draining"
    )

    @model_validator(mode='after')
    def validate_window(self):
        """end must not precede begin."""
        if self.end is not None and self.end < self.begin:
            raise ValueError("end must be >= begin")
        return self


class PerformanceInfo(BaseModel):
    """Timing and memory figures for one pipeline run"""
    processing_time_ms: float = Field(..., description="Wall time to build and drain", ge=0)
    memory_usage_mb: Optional[float] = Field(
        None,
        description="Peak traced memory in megabytes",
        ge=0
    )
    input_size: Optional[int] = Field(None, description="Source length when known", ge=0)
    output_size: int = Field(..., description="Number of produced elements", ge=0)


class PipelineResult(BaseModel):
    """Materialized output of a declarative pipeline"""
    result: List[Any] = Field(..., description="Produced elements in order")
    operations_applied: List[str] = Field(..., description="Operation names in order")
    performance: PerformanceInfo
