"""Timing metrics for graph mutation and solving."""
import time
import psutil
from typing import Dict, Any, Optional
from dataclasses import dataclass
from collections import defaultdict
from loguru import logger


@dataclass
class PerformanceMetrics:
    """Accumulated timings for one named operation."""
    total_operations: int = 0
    total_duration: float = 0.0
    max_duration: float = 0.0
    failed_operations: int = 0
    last_duration: float = 0.0

    def update(self, duration: float, success: bool = True):
        """Update metrics with new operation."""
        self.total_operations += 1
        self.total_duration += duration
        self.max_duration = max(self.max_duration, duration)
        self.last_duration = duration
        if not success:
            self.failed_operations += 1

    @property
    def average_duration(self) -> float:
        if self.total_operations == 0:
            return 0.0
        return self.total_duration / self.total_operations

    @property
    def success_rate(self) -> float:
        if self.total_operations == 0:
            return 0.0
        return (self.total_operations - self.failed_operations) / self.total_operations


class PerformanceMonitor:
    """Track timings of named operations.

    The engine is single threaded, so the monitor keeps no lock and every
    engine owns its own instance.
    """

    def __init__(self):
        self.metrics: Dict[str, PerformanceMetrics] = defaultdict(PerformanceMetrics)
        self.start_time = time.time()
        self.process = psutil.Process()

    def measure(self, operation_name: str) -> "OperationTimer":
        """Context manager for measuring operation time."""
        return OperationTimer(self, operation_name)

    def record_operation(self, operation_name: str, duration: float, success: bool = True):
        self.metrics[operation_name].update(duration, success)

    def get_metrics(self, operation_name: Optional[str] = None) -> Dict[str, Any]:
        """Get metrics for one operation, or a condensed view of all of them."""
        if operation_name:
            if operation_name not in self.metrics:
                return {}

            metrics = self.metrics[operation_name]
            return {
                'operation': operation_name,
                'total_operations': metrics.total_operations,
                'average_duration': metrics.average_duration,
                'last_duration': metrics.last_duration,
                'max_duration': metrics.max_duration,
                'success_rate': metrics.success_rate,
                'failed': metrics.failed_operations,
            }

        return {
            name: {
                'total_operations': m.total_operations,
                'average_duration': m.average_duration,
                'success_rate': m.success_rate,
            }
            for name, m in self.metrics.items()
        }

    def get_summary(self) -> Dict[str, Any]:
        """Get uptime, process memory and per-operation metrics."""
        return {
            'uptime_seconds': time.time() - self.start_time,
            'memory_mb': self.process.memory_info().rss / 1024 / 1024,
            'total_operations': sum(m.total_operations for m in self.metrics.values()),
            'operations': self.get_metrics(),
        }

    def log_summary(self):
        """Log performance summary."""
        summary = self.get_summary()

        logger.info(
            f"Uptime: {summary['uptime_seconds']:.2f}s | "
            f"Memory: {summary['memory_mb']:.1f} MB"
        )
        for op_name, metrics in summary['operations'].items():
            logger.info(
                f"  {op_name}: "
                f"{metrics['total_operations']} ops, "
                f"avg {metrics['average_duration']*1000:.2f}ms, "
                f"success {metrics['success_rate']:.2%}"
            )


class OperationTimer:
    """Context manager for timing operations."""

    def __init__(self, monitor: PerformanceMonitor, operation_name: str):
        self.monitor = monitor
        self.operation_name = operation_name
        self.start_time = None
        self.duration = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time
        self.monitor.record_operation(self.operation_name, self.duration, exc_type is None)
        return False  # Don't suppress exceptions
