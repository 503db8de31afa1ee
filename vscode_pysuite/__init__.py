"""vscode_pysuite - VS Code workspace and .env generation for Python trees.

Walks a project tree, records every non-excluded folder that holds Python
sources, and writes ``<root>.code-workspace`` plus ``<root>/.env``.
"""

from .config_manager import ConfigManager
from .env_writer import generate_env_file
from .exceptions import ArtifactWriteError, ConfigError, PySuiteError, RootResolutionError
from .pysuite_core import PySuiteCore, main
from .tree_walker import SourceFileDetector, SubstringExclusion, TreeWalker
from .workspace_builder import (
    WorkspaceBuilder,
    WorkspaceBuildingStep,
    TargetLayer,
    generate_workspace_file,
)

__all__ = [
    "ConfigManager",
    "PySuiteCore",
    "main",
    "TreeWalker",
    "SubstringExclusion",
    "SourceFileDetector",
    "WorkspaceBuilder",
    "WorkspaceBuildingStep",
    "TargetLayer",
    "generate_workspace_file",
    "generate_env_file",
    "PySuiteError",
    "ConfigError",
    "RootResolutionError",
    "ArtifactWriteError",
]
