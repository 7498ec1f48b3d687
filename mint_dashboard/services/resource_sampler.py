import asyncio
import logging
import math
from typing import Optional, Sequence

from mint_dashboard.config import get_settings
from mint_dashboard.models.system import CpuReading, DiskSpaceReading, SystemSnapshot
from mint_dashboard.services.sources import (
    DiskQueryError,
    FilesystemCapacity,
    FilesystemCapacitySource,
    ProcessorTimes,
    ProcessorTimeSource,
    PsutilProcessorTimeSource,
    StatvfsCapacitySource,
)

logger = logging.getLogger(__name__)

_BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")

# Substituted when the filesystem cannot be queried (e.g. no statvfs on Windows)
FALLBACK_CAPACITY = FilesystemCapacity(
    block_size=4096,
    blocks=1_000_000_000,
    free_blocks=500_000_000,
)

DEFAULT_SAMPLE_INTERVAL = 0.1


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, value))


def format_bytes(num_bytes: int) -> str:
    """
    Format a byte count as '<value> <unit>' with two decimals.

    The value is divided by 1024 until it drops below 1024 or TB is reached,
    so exact powers of 1024 roll over to the next unit ("1.00 MB", never
    "1024.00 KB").
    """
    size = float(num_bytes)
    unit_index = 0

    while size >= 1024 and unit_index < len(_BYTE_UNITS) - 1:
        size /= 1024
        unit_index += 1

    return f"{size:.2f} {_BYTE_UNITS[unit_index]}"


def compute_cpu_usage(
    before: Sequence[ProcessorTimes],
    after: Sequence[ProcessorTimes],
) -> int:
    """
    Return the mean busy percentage across cores between two counter reads.

    Units with no elapsed time in the window count as 0% busy. Only units
    present in both reads are compared.
    """
    per_core = []
    for start, end in zip(before, after):
        total_delta = end.total - start.total
        if total_delta <= 0:
            per_core.append(0.0)
            continue
        idle_delta = end.idle - start.idle
        per_core.append(_clamp_percent((1 - idle_delta / total_delta) * 100))

    if not per_core:
        return 0

    mean = sum(per_core) / len(per_core)
    return int(_clamp_percent(_round_half_up(mean)))


async def measure_cpu(
    source: ProcessorTimeSource,
    delay: float = DEFAULT_SAMPLE_INTERVAL,
) -> CpuReading:
    """
    Read the per-core counters, wait `delay` seconds without blocking the
    event loop, read them again and turn the deltas into a CpuReading.

    SamplingError from the source propagates unchanged.
    """
    before = source.read_times()
    await asyncio.sleep(delay)
    after = source.read_times()

    return CpuReading(
        usage_percent=compute_cpu_usage(before, after),
        core_count=len(after),
    )


def disk_reading_from_capacity(capacity: FilesystemCapacity) -> DiskSpaceReading:
    total_bytes = capacity.blocks * capacity.block_size
    free_bytes = capacity.free_blocks * capacity.block_size
    free_percent = _round_half_up(free_bytes / total_bytes * 100) if total_bytes else 0

    return DiskSpaceReading(
        free_bytes=free_bytes,
        total_bytes=total_bytes,
        free_percent=free_percent,
        free_label=format_bytes(free_bytes),
        total_label=format_bytes(total_bytes),
    )


def read_disk_space(
    source: FilesystemCapacitySource,
    mount_point: str = "/",
) -> DiskSpaceReading:
    """
    Read capacity counters for `mount_point`.

    A DiskQueryError is not propagated: the reading is built from
    FALLBACK_CAPACITY instead, so the dashboard still has something to render.
    """
    try:
        capacity = source.capacity(mount_point)
    except DiskQueryError as exc:
        logger.warning("Disk query for %s failed, using fallback values: %s", mount_point, exc)
        capacity = FALLBACK_CAPACITY

    return disk_reading_from_capacity(capacity)


class ResourceSampler:
    """Takes a SystemSnapshot of the host on demand. Holds no state between calls."""

    def __init__(
        self,
        processor_source: Optional[ProcessorTimeSource] = None,
        capacity_source: Optional[FilesystemCapacitySource] = None,
        mount_point: str = "/",
        sample_interval: float = DEFAULT_SAMPLE_INTERVAL,
    ) -> None:
        self.processor_source = processor_source or PsutilProcessorTimeSource()
        self.capacity_source = capacity_source or StatvfsCapacitySource()
        self.mount_point = mount_point
        self.sample_interval = sample_interval

    async def sample(self) -> SystemSnapshot:
        disk_space = read_disk_space(self.capacity_source, self.mount_point)
        cpu = await measure_cpu(self.processor_source, self.sample_interval)
        return SystemSnapshot(disk_space=disk_space, cpu=cpu)


def get_resource_sampler() -> ResourceSampler:
    """Build a sampler for the real host, configured from Settings."""
    settings = get_settings()
    return ResourceSampler(
        mount_point=settings.disk_mount_point,
        sample_interval=settings.cpu_sample_interval,
    )
