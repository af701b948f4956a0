"""
ActionCheck Core: Input Validators.

Validation of the merged configuration tree and of command-line values
before a detection run starts.
"""
from pathlib import PurePosixPath
from typing import Any, Dict

from actioncheck.core.constants import ErrorCode


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_workflows_dir(workflows_dir: Any) -> bool:
    """Validate the workflows directory setting.

    It must be a non-empty relative path that stays inside the repository.

    Raises:
        ValidationError: If the value is unusable
    """
    if not isinstance(workflows_dir, str) or not workflows_dir.strip():
        raise ValidationError("workflows_dir must be a non-empty string")

    path = PurePosixPath(workflows_dir.replace("\\", "/"))
    if path.is_absolute():
        raise ValidationError(f"workflows_dir must be relative to the repository: {workflows_dir}")
    if ".." in path.parts:
        raise ValidationError(f"workflows_dir must not leave the repository: {workflows_dir}")

    return True


def validate_log_level(level: Any) -> bool:
    """Validate a log level name.

    Raises:
        ValidationError: If the level is unknown
    """
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        raise ValidationError(
            f"Invalid log level: {level!r} (expected one of {', '.join(VALID_LOG_LEVELS)})"
        )
    return True


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate the merged ActionCheck configuration.

    Args:
        config: Merged configuration (as returned by ConfigManager.get_all)

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    section = config.get("actioncheck", {})
    if not isinstance(section, dict):
        raise ValidationError("'actioncheck' section must be a dictionary")

    if "workflows_dir" in section:
        validate_workflows_dir(section["workflows_dir"])

    logging_cfg = section.get("logging") or {}
    if not isinstance(logging_cfg, dict):
        raise ValidationError("'logging' section must be a dictionary")
    if logging_cfg.get("level") is not None:
        validate_log_level(logging_cfg["level"])
    if logging_cfg.get("file") is not None and not isinstance(logging_cfg["file"], str):
        raise ValidationError("logging.file must be a string path")

    outputs_cfg = section.get("outputs") or {}
    if not isinstance(outputs_cfg, dict):
        raise ValidationError("'outputs' section must be a dictionary")
    for key in ("write_outputs", "step_summary"):
        if key in outputs_cfg and not isinstance(outputs_cfg[key], bool):
            raise ValidationError(f"outputs.{key} must be a boolean")

    return True
