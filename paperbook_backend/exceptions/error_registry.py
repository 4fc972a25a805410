"""
Error registry management for loading and accessing error definitions.

This module loads the error_registry.yaml file shipped with the package and
provides utilities to access error definitions by code.
"""

import yaml
from pathlib import Path
from typing import Dict, Optional

from paperbook_backend.interfaces.errors import ErrorDefinition, ErrorMessageFormat


# Cache for error registry
_error_registry: Optional[Dict[str, ErrorDefinition]] = None

# exceptions/ -> paperbook_backend/error_registry.yaml
REGISTRY_PATH = Path(__file__).parent.parent / "error_registry.yaml"


def _read_registry_file() -> dict:
    if not REGISTRY_PATH.exists():
        raise FileNotFoundError(
            f"Error registry not found at {REGISTRY_PATH}. "
            "Please ensure error_registry.yaml is installed with the package."
        )

    with open(REGISTRY_PATH, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_error_registry() -> Dict[str, ErrorDefinition]:
    """
    Load error registry from YAML file.

    Returns:
        Dictionary mapping error codes to ErrorDefinition objects

    Raises:
        FileNotFoundError: If error_registry.yaml is not found
        ValueError: If YAML is malformed or validation fails
    """
    global _error_registry

    if _error_registry is not None:
        return _error_registry

    data = _read_registry_file()

    if not data or "errors" not in data:
        raise ValueError("Invalid error registry format: missing 'errors' key")

    registry = {}
    for error_dict in data["errors"]:
        try:
            message_data = error_dict.get("message", {})
            message = ErrorMessageFormat(
                plain=message_data.get("plain", ""),
                markdown=message_data.get("markdown"),
            )

            error_def = ErrorDefinition(
                code=error_dict["code"],
                http_status=error_dict["http_status"],
                category=error_dict["category"],
                severity=error_dict["severity"],
                title=error_dict["title"],
                message=message,
                retry_after=error_dict.get("retry_after"),
                internal_description=error_dict.get("internal_description", ""),
            )

            registry[error_def.code] = error_def

        except Exception as e:
            raise ValueError(
                f"Failed to parse error definition for {error_dict.get('code', 'unknown')}: {e}"
            ) from e

    _error_registry = registry
    return _error_registry


def get_error_definition(error_code: str) -> ErrorDefinition:
    """
    Get error definition by code.

    Unknown codes resolve to a generic internal error definition instead of
    raising, so a typo in a raise site never masks the original error.
    """
    registry = load_error_registry()

    if error_code not in registry:
        return ErrorDefinition(
            code="UNKNOWN",
            http_status=500,
            category="internal",
            severity="error",
            title="Unknown Error",
            message=ErrorMessageFormat(
                plain=f"An error occurred (code: {error_code})",
                markdown=f"**Unknown Error**\n\nAn error occurred with code: `{error_code}`",
            ),
            internal_description=f"Unknown error code: {error_code}",
        )

    return registry[error_code]


def get_all_error_codes() -> list[str]:
    """Get list of all registered error codes."""
    registry = load_error_registry()
    return list(registry.keys())


def get_errors_by_http_status(http_status: int) -> list[ErrorDefinition]:
    registry = load_error_registry()
    return [
        error_def
        for error_def in registry.values()
        if error_def.http_status == http_status
    ]


def validate_error_registry() -> tuple[bool, list[str]]:
    """
    Validate error registry for completeness and consistency.

    Returns:
        Tuple of (is_valid, list of validation errors)
    """
    errors = []

    try:
        data = _read_registry_file()
        registry = load_error_registry()
    except Exception as e:
        return False, [f"Failed to load registry: {e}"]

    # Duplicates collapse in the dict, so check the raw list
    codes = [error_dict.get("code") for error_dict in data["errors"]]
    duplicates = {code for code in codes if codes.count(code) > 1}
    if duplicates:
        errors.append(f"Duplicate error codes found: {duplicates}")

    for code, error_def in registry.items():
        if not error_def.message.plain:
            errors.append(f"{code}: Missing plain text message")

        if error_def.http_status < 100 or error_def.http_status > 599:
            errors.append(f"{code}: Invalid HTTP status code {error_def.http_status}")

        if not error_def.internal_description:
            errors.append(f"{code}: Missing internal description")

    return len(errors) == 0, errors
