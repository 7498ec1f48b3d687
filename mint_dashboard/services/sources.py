"""
Capability interfaces for the OS facilities the resource sampler reads.

The sampler only talks to these protocols, so tests can feed it fixed
counter values instead of the real host counters.
"""

import os
from typing import List, NamedTuple, Protocol

import psutil


class SamplingError(RuntimeError):
    """Raised when no processing-unit information can be obtained."""


class DiskQueryError(RuntimeError):
    """Raised when filesystem capacity counters cannot be read."""


class ProcessorTimes(NamedTuple):
    """Cumulative time counters of one logical CPU, in seconds."""

    total: float
    idle: float


class FilesystemCapacity(NamedTuple):
    block_size: int
    blocks: int
    free_blocks: int


class ProcessorTimeSource(Protocol):
    def read_times(self) -> List[ProcessorTimes]:
        ...


class FilesystemCapacitySource(Protocol):
    def capacity(self, mount_point: str) -> FilesystemCapacity:
        ...


class PsutilProcessorTimeSource:
    """Per-core CPU time counters via psutil.cpu_times(percpu=True)."""

    def read_times(self) -> List[ProcessorTimes]:
        try:
            per_cpu = psutil.cpu_times(percpu=True)
        except (OSError, NotImplementedError) as exc:
            raise SamplingError(f"CPU time counters unavailable: {exc}") from exc

        if not per_cpu:
            raise SamplingError("No logical CPUs reported by the host")

        return [
            ProcessorTimes(total=_total_time(times), idle=times.idle)
            for times in per_cpu
        ]


def _total_time(times) -> float:
    total = sum(times)
    # On Linux guest time is already accounted for in user/nice
    total -= getattr(times, "guest", 0.0)
    total -= getattr(times, "guest_nice", 0.0)
    return total


class StatvfsCapacitySource:
    """Filesystem block counters via os.statvfs (Unix only)."""

    def capacity(self, mount_point: str) -> FilesystemCapacity:
        try:
            stats = os.statvfs(mount_point)
        except AttributeError as exc:
            # os.statvfs does not exist on Windows
            raise DiskQueryError("statvfs is not supported on this platform") from exc
        except OSError as exc:
            raise DiskQueryError(
                f"statvfs failed for {mount_point}: {exc}"
            ) from exc

        return FilesystemCapacity(
            block_size=stats.f_frsize or stats.f_bsize,
            blocks=stats.f_blocks,
            free_blocks=stats.f_bfree,
        )
