#!/usr/bin/env python3
"""
CLI entrypoint for goqtuic.

Usage:
  python -m app.cli <file.ui | directory> [flags]

Flags:
  -o, --output-dir DIR      (default: uigen)
  --package NAME
  --scaffold PATH           companion main file, single-file mode only
  --scaffold-import PATH
  --force
  --enum-profile PATH       (repeatable)
  --no-default-profile
  -v, --verbose / -q, --quiet
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

import yaml
from lxml import etree

from adapters.qt_ui import parse_ui_file
from app.config import GeneratorConfig
from core.errors import UicError
from gen.go.compiler import UiCompiler
from gen.go.scaffold import ScaffoldGenerator, derive_import_path
from gen.go.writer import GoWriter, output_file_name
from types_profiles.registry import DEFAULT_PROFILE, EnumNamespaceRegistry, load_profiles
from utils.logging_config import configure_logging, level_from_flags

logger = logging.getLogger(__name__)

UI_EXTENSION = ".ui"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goqtuic",
        description="Translate Qt Designer .ui files into Go code for github.com/therecipe/qt",
    )
    parser.add_argument("input", help="Qt Designer .ui file or directory of .ui files")
    parser.add_argument("-o", "--output-dir", default="uigen", help="Generated Go files directory")
    parser.add_argument("--package", default=None, help="Go package name (default: output directory name)")
    parser.add_argument("--scaffold", default=None, help="Companion main file path (single file only)")
    parser.add_argument("--scaffold-import", default=None,
                        help="Import path of the generated package used by the scaffold")
    parser.add_argument("--force", action="store_true", help="Regenerate even if the output is up to date")
    parser.add_argument("--enum-profile", action="append", default=[],
                        help="Extra enum namespace profile (JSON or YAML); repeatable")
    parser.add_argument("--no-default-profile", action="store_true",
                        help="Do not load the bundled enum namespace profile")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Warnings and errors only")
    return parser


def build_registry(cfg: GeneratorConfig) -> EnumNamespaceRegistry:
    paths: List[str] = []
    if cfg.use_default_profile and os.path.isfile(DEFAULT_PROFILE):
        paths.append(DEFAULT_PROFILE)
    paths.extend(cfg.enum_profiles)
    return load_profiles(paths)


def is_up_to_date(ui_path: str, go_path: str) -> bool:
    """True when *go_path* exists and is strictly newer than *ui_path*."""
    if not os.path.exists(go_path):
        return False
    return os.stat(go_path).st_mtime_ns > os.stat(ui_path).st_mtime_ns


def translate_ui_file(ui_path: str, cfg: GeneratorConfig, registry: EnumNamespaceRegistry,
                      scaffold_path: Optional[str] = None) -> Optional[str]:
    """Translate one document; returns the written Go path, or None when skipped as up to date."""
    dest_dir = os.path.abspath(os.path.normpath(cfg.output_directory))
    go_path = os.path.join(dest_dir, output_file_name(ui_path))

    if not cfg.force and is_up_to_date(ui_path, go_path):
        logger.info("%s is up to date", go_path)
        return None

    logger.info("Translating %s...", ui_path)
    document = parse_ui_file(ui_path)
    compiled = UiCompiler(document, registry=registry).compile()
    GoWriter(indent=cfg.indent).write(compiled, cfg.resolved_package_name(), go_path)

    if scaffold_path:
        import_path = cfg.scaffold_import_path or derive_import_path(dest_dir)
        ScaffoldGenerator(indent=cfg.indent).write(compiled, scaffold_path, import_path)
    return go_path


def collect_inputs(path: str) -> List[str]:
    """The file itself, or the ``.ui`` files directly inside a directory (no recursion)."""
    if not os.path.isdir(path):
        return [path]
    files = []
    for name in sorted(os.listdir(path)):
        full = os.path.join(path, name)
        if os.path.isfile(full) and os.path.splitext(name)[1] == UI_EXTENSION:
            files.append(full)
    return files


def run(cfg: GeneratorConfig, input_path: str) -> int:
    if not os.path.exists(input_path):
        logger.error("Input not found: %s", input_path)
        return 1

    try:
        registry = build_registry(cfg)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error("Failed to load enum profiles: %s", e)
        return 1

    directory_mode = os.path.isdir(input_path)
    if directory_mode and cfg.scaffold_path:
        logger.warning("--scaffold is ignored in directory mode")

    failures = 0
    for ui_path in collect_inputs(input_path):
        try:
            translate_ui_file(ui_path, cfg, registry,
                              scaffold_path=None if directory_mode else cfg.scaffold_path)
        except (UicError, OSError, etree.XMLSyntaxError) as e:
            failures += 1
            logger.error("Failed to translate %s: %s", ui_path, e)
    return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    cfg = GeneratorConfig.from_args(args)
    configure_logging(level_from_flags(cfg.verbose, cfg.quiet))
    return run(cfg, args.input)


if __name__ == "__main__":
    sys.exit(main())
