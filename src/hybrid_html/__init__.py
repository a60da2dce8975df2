__version__ = "1.0.0"

from .compiler import CompileResult, compile_hybrid_html
from .inline import ReferenceEvent, inline_components, inline_images, inline_scripts
from .paths import resolve_reference_path

__all__ = [
    "CompileResult",
    "ReferenceEvent",
    "__version__",
    "compile_hybrid_html",
    "inline_components",
    "inline_images",
    "inline_scripts",
    "resolve_reference_path",
]
