from pathlib import Path

from ruleforge.exceptions import ConfigError

from ._models import Config


def safe_load_config(
    project_root: Path,
    *,
    config_path: Path | None = None,
    overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration, reporting failures instead of raising.

    When config_path is provided the file must exist; otherwise the project's
    `.ruleforge.toml` is optional.

    Args:
        project_root: Project root directory.
        config_path: Explicit path to a config file (--config flag).
        overrides: CLI argument overrides passed to Config.load().

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
        On failure, returns a default Config with the error message.
    """
    if config_path is not None and not config_path.is_file():
        return Config(), f"Config file not found: {config_path}"

    try:
        config = Config.load(
            project_root, config_path=config_path, overrides=overrides
        )
    except ConfigError as e:
        return Config(), str(e)
    except OSError as e:
        return Config(), f"Failed to load config: {e}"
    else:
        return config, None
