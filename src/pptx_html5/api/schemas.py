from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ServiceInfo(BaseModel):
    message: str
    version: str
    endpoints: dict[str, str]


class HealthStatus(BaseModel):
    status: str
    timestamp: str


class ConversionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    slides: int
    media_files: int = Field(alias="mediaFiles")
    html_file: str = Field(alias="htmlFile")
    css_files: list[str] = Field(alias="cssFiles")
    output_directory: str = Field(alias="outputDirectory")


class ConvertResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    input_file: str = Field(alias="inputFile")
    output_directory: str = Field(alias="outputDirectory")
    result: ConversionPayload


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
