from typing import Dict, List, Optional, Any
import json
import os

import yaml

from meta import ToolkitMetaModel, DEFAULT_META

# Bundled profile with namespaces and parameter types outside the built-in table.
DEFAULT_PROFILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "qt_extras.yaml")


class EnumNamespaceRegistry:
    """Enum namespace and parameter-type tables, seeded from the toolkit catalog.

    Profiles (JSON or YAML) extend or override the built-in tables::

        enum_namespaces:
          QWizard: widgets
          QMovie: gui
        go_types:
          QModelIndex: "*core.QModelIndex"
    """

    def __init__(self, profiles: Optional[List[Dict[str, Any]]] = None,
                 meta: Optional[ToolkitMetaModel] = None) -> None:
        meta = meta or DEFAULT_META
        self.namespaces: Dict[str, str] = dict(meta.enum_namespaces)
        self.go_types: Dict[str, str] = dict(meta.go_param_types)
        if profiles:
            for prof in profiles:
                self._merge_profile(prof)

    def _merge_profile(self, profile: Dict[str, Any]) -> None:
        self.namespaces.update(profile.get("enum_namespaces", {}) or {})
        self.go_types.update(profile.get("go_types", {}) or {})

    def subpackage_for(self, namespace: str) -> Optional[str]:
        return self.namespaces.get(namespace)

    def go_param_type(self, doc_type: str) -> str:
        return self.go_types.get(doc_type, doc_type)


def _load_single_profile(path: str) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        if path.lower().endswith(('.yml', '.yaml')):
            return yaml.safe_load(f) or {}
        return json.load(f)


def load_profiles(paths: List[str], meta: Optional[ToolkitMetaModel] = None) -> EnumNamespaceRegistry:
    profiles: List[Dict[str, Any]] = []
    for p in paths:
        if not p:
            continue
        if not os.path.isfile(p):
            raise FileNotFoundError(f"Enum profile file not found: {p}")
        profiles.append(_load_single_profile(p))
    return EnumNamespaceRegistry(profiles, meta=meta)
