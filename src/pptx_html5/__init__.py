"""Convert PPTX packages into self-contained HTML5 slideshows."""

from .config import AppConfig, load_config
from .core import ConversionService, convert_pptx_to_html
from .errors import ConversionError, ConversionFailedError
from .models import ConversionOptions, ConversionResult

__version__ = "1.0.0"

__all__ = [
    "AppConfig",
    "load_config",
    "ConversionError",
    "ConversionFailedError",
    "ConversionOptions",
    "ConversionResult",
    "ConversionService",
    "convert_pptx_to_html",
]
