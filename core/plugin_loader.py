# -*- coding: utf-8 -*-
from __future__ import annotations
import importlib, logging, pkgutil
from pathlib import Path
from typing import List
from .plugin_base import REGISTRY

log = logging.getLogger(__name__)

def discover_plugins(plugins_dir: str | None = None) -> List[str]:
    mod_names = []
    base = Path(plugins_dir or Path(__file__).resolve().parents[1] / "plugins")
    if not base.exists():
        return mod_names
    pkg_name = "plugins"
    for _, name, _ in pkgutil.iter_modules([str(base)]):
        full = f"{pkg_name}.{name}"
        try:
            importlib.import_module(full)
            mod_names.append(full)
        except Exception as e:
            log.warning("Failed to load %s: %s", full, e)
    return mod_names

def get_plugins():
    return list(REGISTRY)

def find_plugin(kind: str):
    for plugin in REGISTRY:
        if plugin.can_handle(kind):
            return plugin
    return None
