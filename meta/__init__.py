from .toolkit_meta import ToolkitMetaModel, DEFAULT_ENUM_NAMESPACES, DEFAULT_GO_PARAM_TYPES
from .default_model import DEFAULT_META

__all__ = [
    "ToolkitMetaModel",
    "DEFAULT_ENUM_NAMESPACES",
    "DEFAULT_GO_PARAM_TYPES",
    "DEFAULT_META",
]
