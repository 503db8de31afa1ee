from dataclasses import dataclass
import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .exceptions import ArtifactWriteError, PySuiteError
from .logger import Logger

ROOT_FOLDER = "."


@dataclass
class TargetLayer:
    target: str
    default: Dict | List


@dataclass
class WorkspaceBuildingStep:
    target: List[TargetLayer]
    content: Dict | List


def workspace_file_for(root: str, extension: str = ".code-workspace") -> str:
    """Return ``<root><extension>`` with trailing separators stripped from root."""
    stripped = root.rstrip("/" + os.sep) or root
    return f"{stripped}{extension}"


class WorkspaceBuilder:

    def __init__(
        self,
        workspace_path: Optional[Union[str, Path]] = None,
        extension: str = ".code-workspace",
    ) -> None:
        self.logger = Logger("workspace_builder")
        self.steps: List[WorkspaceBuildingStep] = []

        # Resolve workspace path
        if workspace_path is not None:
            self.workspace_path = Path(workspace_path)
        else:
            cwd = Path.cwd()
            project_name = cwd.name or "workspace"
            self.workspace_path = cwd / f"{project_name}{extension}"

        if not str(self.workspace_path).endswith(extension):
            message = f"Workspace file should have a {extension} extension."
            self.logger.error(message)
            raise ValueError("Invalid workspace file extension.")

    def add_step(self, step: WorkspaceBuildingStep) -> None:
        if not isinstance(step, WorkspaceBuildingStep):
            raise TypeError("step must be an instance of WorkspaceBuildingStep")
        self.logger.debug(f"Adding workspace build step targeting {[layer.target for layer in step.target]}")
        self.steps.append(step)

    def add_folders(self, paths: Iterable[str]) -> None:
        self.add_step(
            WorkspaceBuildingStep(
                target=[TargetLayer("folders", [])],
                content=[{"path": path} for path in paths],
            )
        )

    def add_settings(self, settings: Dict) -> None:
        self.add_step(
            WorkspaceBuildingStep(target=[TargetLayer("settings", {})], content=copy.deepcopy(settings))
        )

    def clear_steps(self) -> None:
        self.steps.clear()

    def build_workspace(self) -> Dict:
        """Apply all registered steps and return the final workspace structure."""
        workspace_data: Dict[str, Any] = {}

        if not self.steps:
            self.logger.warning("No workspace build steps defined; generating an empty workspace structure.")

        for step in self.steps:
            try:
                target_keys = [layer.target for layer in step.target]
                defaults = [layer.default for layer in step.target]
                ensured = self._chain_ensure_key(workspace_data, target_keys, defaults)
                if isinstance(ensured, dict) and isinstance(step.content, dict):
                    ensured.update(step.content)
                elif isinstance(ensured, list) and isinstance(step.content, list):
                    ensured.extend(step.content)
                else:
                    raise PySuiteError(
                        "WorkspaceBuilder step content does not match the shape of its target."
                    )
            except Exception as exc:
                self.logger.error(f"Failed to apply workspace build step: {exc}")
                raise

        return workspace_data

    def write_workspace(self, workspace_data: Dict) -> None:
        """Persist the workspace JSON structure to disk, replacing any previous file."""
        try:
            json_content = json.dumps(workspace_data, indent=4) + "\n"
        except (TypeError, ValueError) as exc:
            self.logger.error(f"Workspace data is not JSON-serializable: {exc}")
            raise PySuiteError("Workspace data is not JSON-serializable.") from exc

        try:
            with self.workspace_path.open("w", encoding="utf-8") as f:
                f.write(json_content)
        except OSError as exc:
            raise ArtifactWriteError(
                f"Error creating workspace file: {exc}", str(self.workspace_path)
            ) from exc

    def _ensure_key(self, data: dict, key: str, default_value: Any) -> None:
        if key not in data:
            # copy so the TargetLayer default is never mutated by later steps
            data[key] = type(default_value)(default_value)

    def _chain_ensure_key(self, data: dict, keys: List[str], default_value: List[Any]):
        """Ensure nested keys exist with corresponding default values."""
        current: Any = data
        if len(keys) != len(default_value):
            raise ValueError("keys and default_value must have the same length")

        for i, key in enumerate(keys):
            if not isinstance(current, dict):
                raise PySuiteError("Intermediate workspace structure is not a mapping while ensuring keys.")
            self._ensure_key(current, key, default_value[i])
            current = current[key]
        return current


def generate_workspace_file(
    root: str,
    folders: Iterable[str],
    settings: Dict,
    extension: str = ".code-workspace",
) -> Path:
    """Write ``<root>.code-workspace`` listing ``.`` followed by ``folders``."""
    builder = WorkspaceBuilder(workspace_file_for(root, extension), extension)
    builder.add_folders([ROOT_FOLDER])
    builder.add_folders(folders)
    builder.add_settings(settings)
    builder.write_workspace(builder.build_workspace())
    return builder.workspace_path
