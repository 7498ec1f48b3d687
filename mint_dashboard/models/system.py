from pydantic import BaseModel, ConfigDict, Field, model_validator


class DiskSpaceReading(BaseModel):
    """Capacity of the sampled filesystem, in bytes and as display labels."""

    free_bytes: int = Field(..., ge=0, description="Free space in bytes")
    total_bytes: int = Field(..., ge=0, description="Total capacity in bytes")
    free_percent: int = Field(
        ...,
        ge=0,
        le=100,
        description="Free space as a rounded percentage of the total capacity",
    )
    free_label: str = Field(..., description="Free space, e.g. '1.50 GB'")
    total_label: str = Field(..., description="Total capacity, e.g. '3.00 TB'")

    @model_validator(mode="after")
    def _free_within_total(self) -> "DiskSpaceReading":
        if self.free_bytes > self.total_bytes:
            raise ValueError("free_bytes must not exceed total_bytes")
        return self


class CpuReading(BaseModel):
    """CPU utilisation over one measurement window."""

    usage_percent: int = Field(
        ...,
        ge=0,
        le=100,
        description="Mean busy share of all logical cores in percent",
    )
    core_count: int = Field(
        ...,
        ge=1,
        description="Number of logical cores seen at the end of the window",
    )


class DiskSpaceInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    free: str
    total: str
    percent_free: int = Field(..., ge=0, le=100, alias="percentFree")


class CpuInfo(BaseModel):
    usage: int = Field(..., ge=0, le=100)
    cores: int = Field(..., ge=1)


class SystemInfoResponse(BaseModel):
    """JSON body of a successful /api/system-info response."""

    model_config = ConfigDict(populate_by_name=True)

    disk_space: DiskSpaceInfo = Field(..., alias="diskSpace")
    cpu: CpuInfo


class SystemSnapshot(BaseModel):
    """Combined CPU and disk reading taken by one query."""

    disk_space: DiskSpaceReading
    cpu: CpuReading

    def to_response(self) -> SystemInfoResponse:
        return SystemInfoResponse(
            disk_space=DiskSpaceInfo(
                free=self.disk_space.free_label,
                total=self.disk_space.total_label,
                percent_free=self.disk_space.free_percent,
            ),
            cpu=CpuInfo(
                usage=self.cpu.usage_percent,
                cores=self.cpu.core_count,
            ),
        )


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Short, client-safe error message")
