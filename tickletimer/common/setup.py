import os
import platform
from pathlib import Path
from dataclasses import dataclass

# Lil helper function to create a directory (and parents) if missing, returning it for chaining.
def ensure_directory(path: Path):
    path.mkdir(parents=True,exist_ok=True)
    return path

# Returns the per-user config directory for this platform, the same place the OS would put any other app's
# settings. TICKLETIMER_HOME overrides the whole data folder.
def user_config_dir() -> Path:
    system = platform.system().lower()
    if system == "windows":
        appdata = os.getenv("APPDATA")
        return Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    if system == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_CONFIG_HOME") or Path.home() / ".config")

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path
    dumps: Path

    @staticmethod
    def build():
        override = os.getenv("TICKLETIMER_HOME")
        if override:
            data = ensure_directory(Path(override))
        else:
            data = ensure_directory(user_config_dir() / "tickletimer")

        # Folders within the data folder
        logs = ensure_directory(data / "logs")
        dumps = ensure_directory(data / "dumps")

        return ProjectPaths(
            data = data,
            logs = logs,
            dumps = dumps,
        )
PATHS = ProjectPaths.build()
