"""
Helpers for building and running declarative pipelines.

A ``PipelineSpec`` names its functions instead of carrying them, so callers
pass a registry mapping names to callables.
"""

import gc
import time
import logging
import tracemalloc
from typing import Any, Callable, Dict, Optional

from .cursor import Cursor
from .models import OperationSpec, OperationType, PerformanceInfo, PipelineResult, PipelineSpec
from .sources import source

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class UnknownFunctionError(KeyError):
    """Raised when an operation names a function missing from the registry."""
    pass


def _lookup(functions: Dict[str, Callable], name: str) -> Callable:
    try:
        return functions[name]
    except KeyError:
        raise UnknownFunctionError(f"Function not registered: {name}") from None


def apply_operation(cursor: Cursor, op: OperationSpec,
                    functions: Optional[Dict[str, Callable]] = None) -> Cursor:
    """Wrap ``cursor`` in the decorator described by ``op``."""
    functions = functions or {}

    if op.type in (OperationType.DROP, OperationType.TAKE):
        return getattr(cursor, op.type.value)(op.count)
    if op.type in (OperationType.MAP, OperationType.FILTER,
                   OperationType.UNTIL, OperationType.TAKE_WHILE):
        return getattr(cursor, op.type.value)(_lookup(functions, op.function))
    # *_eq / *_neq
    return getattr(cursor, op.type.value)(op.value)


def build_pipeline(source_data: Any, spec: PipelineSpec,
                   functions: Optional[Dict[str, Callable]] = None) -> Cursor:
    """Build the cursor chain described by ``spec`` over ``source_data``."""
    cursor = source(source_data, spec.begin, spec.end)
    for op in spec.operations:
        cursor = apply_operation(cursor, op, functions)
    return cursor


def run_pipeline(source_data: Any, spec: PipelineSpec,
                 functions: Optional[Dict[str, Callable]] = None) -> PipelineResult:
    """Build, drain and measure a declarative pipeline."""
    operations_applied = [op.type.value for op in spec.operations]
    memory_mb = None

    if spec.measure_memory:
        tracemalloc.start()
        gc.collect()

    start_time = time.perf_counter()
    try:
        result = build_pipeline(source_data, spec, functions).to_collection()

        if spec.measure_memory:
            current, peak = tracemalloc.get_traced_memory()
            memory_mb = peak / 1024 / 1024
    except Exception as e:
        execution_time_ms = (time.perf_counter() - start_time) * 1000
        logger.error(f"Pipeline {operations_applied} failed after {execution_time_ms:.2f}ms: {e}")
        raise
    finally:
        if spec.measure_memory:
            tracemalloc.stop()

    processing_time_ms = (time.perf_counter() - start_time) * 1000
    input_size = len(source_data) if hasattr(source_data, "__len__") else None

    logger.info(
        f"Pipeline {operations_applied} produced {len(result)} elements "
        f"in {processing_time_ms:.2f}ms"
    )

    return PipelineResult(
        result=result,
        operations_applied=operations_applied,
        performance=PerformanceInfo(
            processing_time_ms=processing_time_ms,
            memory_usage_mb=memory_mb,
            input_size=input_size,
            output_size=len(result)
        )
    )
