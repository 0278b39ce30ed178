from .loader import load_config
from .models import (
    ConversionConfig,
    DocxSourceConfig,
    HtmlSourceConfig,
    OutputConfig,
    RichmarkConfig,
    SourcesConfig,
)

__all__ = [
    "ConversionConfig",
    "DocxSourceConfig",
    "HtmlSourceConfig",
    "OutputConfig",
    "RichmarkConfig",
    "SourcesConfig",
    "load_config",
]
