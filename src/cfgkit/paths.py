from pathlib import Path

from platformdirs import user_config_path


def user_config_file(app_name: str, filename: str) -> Path:
    """Return the path of a config file in the per-user config directory.

    The directory is platform specific (e.g. ``~/.config/<app_name>`` on
    Linux, ``%LOCALAPPDATA%\\<app_name>`` on Windows) and is not created.

    Args:
        app_name: Application directory name.
        filename: File name inside that directory; its extension selects
            the format when the path is passed to ``load``.
    """
    return user_config_path(app_name, appauthor=False) / filename
