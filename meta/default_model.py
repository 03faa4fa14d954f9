from .toolkit_meta import ToolkitMetaModel


DEFAULT_META = ToolkitMetaModel()
