import os
from pathlib import Path

from .exceptions import ArtifactWriteError


def env_file_for(root: str, name: str = ".env") -> str:
    return os.path.join(root, name)


def render_env(root: str, variable: str = "PYTHONPATH") -> str:
    return f'{variable}="{root}"\n'


def generate_env_file(root: str, name: str = ".env", variable: str = "PYTHONPATH") -> Path:
    """Write ``<root>/.env`` binding ``variable`` to the root path, replacing any previous file.

    Undecodable bytes in ``root`` are written back as the original bytes.
    """
    env_path = Path(env_file_for(root, name))
    content = render_env(root, variable)
    try:
        content.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError as exc:
        raise ArtifactWriteError(f"Error creating {name} file: {exc}", str(env_path)) from exc

    try:
        with env_path.open("w", encoding="utf-8", errors="surrogateescape") as f:
            f.write(content)
    except OSError as exc:
        raise ArtifactWriteError(f"Error creating {name} file: {exc}", str(env_path)) from exc
    return env_path
