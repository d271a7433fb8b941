"""Plane connection configuration with directory-based detection.

## .plane/ Folder Specification

```
.plane/
└── config.json
```

### config.json Structure

```json
{
  "plane": {
    "base_url": "https://plane.example.com/api/v1",
    "workspace": "my-workspace"
  },
  "auth": {
    "api_key_env": "PLANE_API_KEY_WORK"
  }
}
```

### Resolution Order

1. .plane/config.json in the current directory or any parent
2. User config (config.json in the platform's user config dir for plane-pm)
3. PLANE_BASE_URL / PLANE_WORKSPACE environment variables override both
4. Built-in defaults

The API key is read from the environment variable named by
``auth.api_key_env`` (default PLANE_API_KEY), then PLANE_API_KEY, then the
user config's ``api_key``.
"""

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from platformdirs import user_config_dir

from .errors import ConfigError

DEFAULT_BASE_URL = "https://plane.mobelaris.com/api/v1"
DEFAULT_WORKSPACE = "soundboxstore"
DEFAULT_API_KEY_ENV = "PLANE_API_KEY"

USER_CONFIG_DIR = Path(user_config_dir("plane-pm"))
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.json"

PLANE_CONFIG_DIR = ".plane"
PLANE_CONFIG_FILE = "config.json"


@dataclass
class PlaneContext:
    """Resolved Plane connection settings for a directory."""

    base_url: str = DEFAULT_BASE_URL
    workspace: str = DEFAULT_WORKSPACE

    # Source of config
    config_path: Optional[Path] = None
    config_source: str = "none"  # "directory", "parent", "user", "none"

    # Auth
    api_key: Optional[str] = None
    api_key_env: str = DEFAULT_API_KEY_ENV

    def has_api_key(self) -> bool:
        return bool(self.api_key)


def find_plane_config(start_path: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest .plane/config.json by walking up the directory tree."""
    if start_path is None:
        start_path = Path.cwd()

    current = Path(start_path).resolve()

    while current != current.parent:
        config_path = current / PLANE_CONFIG_DIR / PLANE_CONFIG_FILE
        if config_path.exists():
            return config_path
        current = current.parent

    # Check root
    config_path = current / PLANE_CONFIG_DIR / PLANE_CONFIG_FILE
    if config_path.exists():
        return config_path

    return None


def load_config_file(config_path: Path) -> dict:
    """Read a JSON config file, raising ConfigError if it is not an object."""
    try:
        with open(config_path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(config_path, str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(config_path, "top level must be a JSON object")
    return data


def load_user_config() -> Optional[dict]:
    if USER_CONFIG_FILE.exists():
        return load_config_file(USER_CONFIG_FILE)
    return None


def resolve_context(path: Optional[Path] = None) -> PlaneContext:
    """Resolve Plane settings for a path.

    Args:
        path: Directory to resolve context for (default: cwd)

    Returns:
        PlaneContext with resolved configuration
    """
    context = PlaneContext()
    user_config = load_user_config()

    config_path = find_plane_config(path)
    if config_path:
        data = load_config_file(config_path)
        context.config_path = config_path

        target_dir = Path(path).resolve() if path else Path.cwd().resolve()
        config_dir = config_path.parent.parent  # .plane/config.json -> .plane -> parent
        context.config_source = "directory" if config_dir == target_dir else "parent"

        plane_config = data.get("plane", {})
        context.base_url = plane_config.get("base_url", context.base_url)
        context.workspace = plane_config.get("workspace", context.workspace)

        auth_config = data.get("auth", {})
        context.api_key_env = auth_config.get("api_key_env", DEFAULT_API_KEY_ENV)
    elif user_config:
        context.config_path = USER_CONFIG_FILE
        context.config_source = "user"
        context.base_url = user_config.get("base_url", context.base_url)
        context.workspace = user_config.get("workspace", context.workspace)

    context.base_url = os.environ.get("PLANE_BASE_URL", context.base_url).rstrip("/")
    context.workspace = os.environ.get("PLANE_WORKSPACE", context.workspace)

    context.api_key = os.environ.get(context.api_key_env)
    if not context.api_key:
        context.api_key = os.environ.get(DEFAULT_API_KEY_ENV)
    if not context.api_key and user_config:
        context.api_key = user_config.get("api_key")

    return context


def get_context_help_message(context: PlaneContext) -> str:
    """Describe the resolved context, with setup hints if nothing was found."""
    lines = [f"Plane context (from {context.config_source}):"]
    if context.config_path:
        lines.append(f"  Config: {context.config_path}")
    lines.append(f"  Base URL: {context.base_url}")
    lines.append(f"  Workspace: {context.workspace}")

    if context.api_key:
        lines.append(f"  Auth: {context.api_key_env} (configured)")
    else:
        lines.append(f"  Auth: {context.api_key_env} (NOT SET)")
        lines.append("")
        lines.append(f"Set the API key with: export {context.api_key_env}=<your key>")

    return "\n".join(lines)


def configure_logging(verbose: bool = False) -> None:
    """Send log output to stderr; stdout carries the MCP stdio protocol."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
