from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class GeneratorConfig:
    # Output settings
    output_directory: str = "uigen"            # Generated Go files land here
    package_name: Optional[str] = None         # Defaults to the output directory base name
    indent: str = "\t"

    # Companion scaffold (single-file mode only)
    scaffold_path: Optional[str] = None
    scaffold_import_path: Optional[str] = None  # Derived from $GOPATH/src when absent

    # Processing settings
    force: bool = False                        # Regenerate even if the output is newer
    enum_profiles: List[str] = field(default_factory=list)
    use_default_profile: bool = True

    # Logging
    verbose: bool = False
    quiet: bool = False

    def resolved_package_name(self) -> str:
        if self.package_name:
            return self.package_name
        return os.path.basename(os.path.abspath(os.path.normpath(self.output_directory)))

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "GeneratorConfig":
        return cls(
            output_directory=args.output_dir,
            package_name=args.package,
            scaffold_path=args.scaffold,
            scaffold_import_path=args.scaffold_import,
            force=args.force,
            enum_profiles=list(args.enum_profile or []),
            use_default_profile=not args.no_default_profile,
            verbose=args.verbose,
            quiet=args.quiet,
        )


DEFAULT_CONFIG = GeneratorConfig()

__all__ = [
    "GeneratorConfig",
    "DEFAULT_CONFIG",
]
