from pydantic import BaseModel, Field
from typing import Literal


class ConversionConfig(BaseModel):
    base_font_size: float = Field(default=16.0, gt=0)
    detect_base_font_size: bool = True


class DocxSourceConfig(BaseModel):
    monospace_fonts: list[str] = Field(default_factory=lambda: [
        "Courier", "Courier New", "Consolas", "Menlo", "Monaco",
        "Lucida Console", "Source Code Pro", "Fira Code", "JetBrains Mono",
    ])


class HtmlSourceConfig(BaseModel):
    heading_scale: dict[str, float] = Field(default_factory=lambda: {
        "h1": 2.0, "h2": 1.5, "h3": 1.25, "h4": 1.0, "h5": 0.83, "h6": 0.67,
    })


class SourcesConfig(BaseModel):
    max_file_size_mb: int = Field(default=20, gt=0)
    docx: DocxSourceConfig = Field(default_factory=DocxSourceConfig)
    html: HtmlSourceConfig = Field(default_factory=HtmlSourceConfig)


class OutputConfig(BaseModel):
    base_dir: str = "converted"
    default_title: str = "Converted"
    overwrite: bool = False


class RichmarkConfig(BaseModel):
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
