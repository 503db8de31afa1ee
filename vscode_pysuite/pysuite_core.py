import argparse
import os
import sys
from typing import List, Optional

from .config_manager import ConfigManager
from .env_writer import generate_env_file
from .exceptions import ArtifactWriteError, RootResolutionError
from .logger import Logger
from .tree_walker import TreeWalker
from .workspace_builder import generate_workspace_file


def printable(text: str) -> str:
    """Render a path or message for the console, escaping undecodable bytes."""
    try:
        return os.fsencode(text).decode("utf-8", "backslashreplace")
    except UnicodeEncodeError:
        return text.encode("utf-8", "backslashreplace").decode("utf-8")


class PySuiteCore:

    def __init__(self, cm: Optional[ConfigManager] = None):
        self.cm = cm or ConfigManager()
        self.config = self.cm.config
        self.logger = Logger("pysuite_core")
        self.walker = TreeWalker.from_config(self.config.tree_walker)

    @staticmethod
    def resolve_root(root: Optional[str] = None) -> str:
        if root is not None:
            return root
        try:
            return os.getcwd()
        except OSError as exc:
            raise RootResolutionError(f"Error getting current directory: {exc}") from exc

    def report_failure(self, exc: ArtifactWriteError) -> None:
        # always shown, whatever the log level
        print(f"[-] {printable(str(exc))}", file=sys.stderr)
        self.logger.debug(f"Skipped artifact {printable(exc.path)}")

    def create_workspace_file(self, root: str) -> bool:
        try:
            path = generate_workspace_file(
                root,
                self.walker.walk(root),
                self.config.workspace.settings,
                self.config.workspace.extension,
            )
        except ArtifactWriteError as exc:
            self.report_failure(exc)
            return False
        print(f"[+] Workspace file created: {printable(str(path))}")
        return True

    def create_env_file(self, root: str) -> bool:
        try:
            path = generate_env_file(root, self.config.env_file.name, self.config.env_file.variable)
        except ArtifactWriteError as exc:
            self.report_failure(exc)
            return False
        print(f"[+] {self.config.env_file.name} file created: {printable(str(path))}")
        return True

    def run(self, root: Optional[str] = None) -> None:
        """Generate both artifacts for ``root``; each one succeeds or fails on its own."""
        target = self.resolve_root(root)
        print(f"Target path: {printable(target)}")
        self.create_workspace_file(target)
        self.create_env_file(target)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="vscode-pysuite",
        description="Generate a VS Code multi-root workspace and a PYTHONPATH .env for a project tree.",
    )
    parser.add_argument("root", nargs="?", help="Project root (defaults to the current directory)")
    args = parser.parse_args(argv)

    try:
        PySuiteCore().run(args.root)
    except RootResolutionError as exc:
        print(printable(str(exc)), file=sys.stderr)
        return 1
    return 0
