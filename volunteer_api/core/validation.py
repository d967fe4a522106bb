"""Explicit request-body validation.

Handlers call ``validate_body`` before anything else so a bad payload never
reaches a service. All issues are collected, not just the first one.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from volunteer_api.core.exceptions import ValidationFailedError, format_issue_path

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def collect_issues(exc: ValidationError) -> list[dict[str, str]]:
    """Flatten a pydantic error into ``[{"path", "message"}]``."""
    return [
        {"path": format_issue_path(err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]


def validate_body(schema: type[SchemaT], payload: Any) -> SchemaT:
    """Validate ``payload`` against ``schema`` or raise ValidationFailedError."""
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailedError(collect_issues(exc)) from exc


def validate_list_body(schema: type[SchemaT], payload: Any) -> list[SchemaT]:
    """Validate a non-empty JSON array where every item matches ``schema``."""
    if not isinstance(payload, list):
        raise ValidationFailedError([{"path": "", "message": "Expected a JSON array"}])
    if not payload:
        raise ValidationFailedError([{"path": "", "message": "Array must not be empty"}])

    items: list[SchemaT] = []
    issues: list[dict[str, str]] = []
    for index, item in enumerate(payload):
        try:
            items.append(schema.model_validate(item))
        except ValidationError as exc:
            for issue in collect_issues(exc):
                path = f"{index}.{issue['path']}" if issue["path"] else str(index)
                issues.append({"path": path, "message": issue["message"]})
    if issues:
        raise ValidationFailedError(issues)
    return items
