"""
Response models for chuk-mcp-hgt tools.

All tool responses are Pydantic models for type safety and consistent API.
"""

from pydantic import BaseModel, ConfigDict, Field


def format_response(model: BaseModel, output_mode: str = "json") -> str:
    """Format a response model as JSON or human-readable text.

    Args:
        model: Pydantic response model instance
        output_mode: "json" (default) or "text"

    Returns:
        Formatted string
    """
    if output_mode == "text" and hasattr(model, "to_text"):
        return str(model.to_text())
    return str(model.model_dump_json())


class ErrorResponse(BaseModel):
    """Error response model for tool failures."""

    model_config = ConfigDict(extra="forbid")

    error: str = Field(..., description="Error message describing what went wrong")
    error_type: str | None = Field(None, description="Error class, e.g. NetworkError")

    def to_text(self) -> str:
        if self.error_type:
            return f"Error ({self.error_type}): {self.error}"
        return f"Error: {self.error}"


class PointElevationResponse(BaseModel):
    """Response model for single-point elevation query."""

    model_config = ConfigDict(extra="forbid")

    lat: float = Field(..., description="Latitude of the query point")
    lon: float = Field(..., description="Longitude of the query point")
    elevation_m: int = Field(..., description="Elevation in whole metres")
    tile: str = Field(..., description="HGT tile the sample was read from (e.g., N47E005)")
    is_void: bool = Field(..., description="True if the sample is the -32768 no-data value")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [
            f"Elevation at ({self.lat:.6f}, {self.lon:.6f}): {self.elevation_m}m",
            f"Tile: {self.tile}",
        ]
        if self.is_void:
            lines.append("WARNING: void sample (no data)")
        return "\n".join(lines)


class PointInfo(BaseModel):
    """Elevation data for a single point in a multi-point query."""

    model_config = ConfigDict(extra="forbid")

    lat: float = Field(..., description="Latitude")
    lon: float = Field(..., description="Longitude")
    elevation_m: int = Field(..., description="Elevation in whole metres")
    tile: str = Field(..., description="HGT tile name")
    is_void: bool = Field(False, description="True if the sample is a void")


class MultiPointResponse(BaseModel):
    """Response model for multi-point elevation query."""

    model_config = ConfigDict(extra="forbid")

    point_count: int = Field(..., description="Number of points queried", ge=1)
    points: list[PointInfo] = Field(..., description="Elevation results per point")
    elevation_range: list[int] = Field(
        ..., description="[min, max] elevation across non-void points"
    )
    void_count: int = Field(0, description="Number of void samples", ge=0)
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        elev_min, elev_max = self.elevation_range
        lines = [
            f"Elevation for {self.point_count} point(s)",
            f"Range: {elev_min}m to {elev_max}m",
            "",
        ]
        for p in self.points:
            suffix = " (void)" if p.is_void else ""
            lines.append(f"  ({p.lat:.6f}, {p.lon:.6f}): {p.elevation_m}m [{p.tile}]{suffix}")
        return "\n".join(lines)


class TileInfoResponse(BaseModel):
    """Response model describing the tile that holds a coordinate."""

    model_config = ConfigDict(extra="forbid")

    lat: float = Field(..., description="Query latitude")
    lon: float = Field(..., description="Query longitude")
    name: str = Field(..., description="Tile name (e.g., N47E005)")
    folder: str = Field(..., description="Skadi folder (e.g., N47)")
    file_name: str = Field(..., description="Tile file name (e.g., N47E005.hgt)")
    cache_path: str = Field(..., description="Local cache path of the tile")
    url: str = Field(..., description="Remote gzip archive URL")
    cached: bool = Field(..., description="Whether the tile is already in the local cache")
    grid_size: int | None = Field(None, description="Samples per side (3601 or 1201)")
    format: str | None = Field(None, description="srtm1 or srtm3, if cached")
    size_bytes: int | None = Field(None, description="Cached file size in bytes")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [
            f"Tile {self.name} for ({self.lat:.6f}, {self.lon:.6f})",
            f"URL: {self.url}",
            f"Cache: {self.cache_path}",
        ]
        if self.cached:
            lines.append(f"Cached: yes ({self.format or 'unknown'}, {self.size_bytes} bytes)")
        else:
            lines.append("Cached: no")
        return "\n".join(lines)


class StatusResponse(BaseModel):
    """Response model for server status queries."""

    model_config = ConfigDict(extra="forbid")

    server: str = Field(default="chuk-mcp-hgt", description="Server name")
    version: str = Field(default="0.1.0", description="Server version")
    cache_dir: str = Field(..., description="Local tile cache directory")
    base_url: str = Field(..., description="Remote Skadi archive base URL")
    cached_tiles: int = Field(default=0, description="Number of tiles in the cache", ge=0)
    cache_size_mb: float = Field(default=0.0, description="Current tile cache size in megabytes")

    def to_text(self) -> str:
        lines = [
            f"{self.server} v{self.version}",
            f"Cache: {self.cache_dir}",
            f"Source: {self.base_url}",
            f"Cached tiles: {self.cached_tiles} ({self.cache_size_mb:.1f} MB)",
        ]
        return "\n".join(lines)


class CapabilitiesResponse(BaseModel):
    """Response model for server capabilities listing."""

    model_config = ConfigDict(extra="forbid")

    server: str = Field(..., description="Server name")
    version: str = Field(..., description="Server version")
    formats: list[str] = Field(..., description="Supported HGT grid formats")
    grid_sizes: list[int] = Field(..., description="Supported grid sizes (samples per side)")
    void_value: int = Field(..., description="No-data sentinel elevation")
    tools: list[str] = Field(..., description="Available tool names")
    tool_count: int = Field(..., description="Number of available tools", ge=0)
    llm_guidance: str = Field(..., description="LLM-friendly usage guidance for the server")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [
            f"{self.server} v{self.version}",
            f"Tools: {self.tool_count} ({', '.join(self.tools)})",
            f"Formats: {', '.join(self.formats)}",
            f"Grid sizes: {', '.join(str(g) for g in self.grid_sizes)}",
            f"Void value: {self.void_value}",
            f"Guidance: {self.llm_guidance}",
        ]
        return "\n".join(lines)
