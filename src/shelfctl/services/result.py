"""ServiceResult and ServiceError: the contract between core and shell.

INVARIANT: Every CatalogService method returns a ServiceResult; expected
absence (unknown identifier) and validation failures become ``ok=False``
results instead of escaping as exceptions.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Uniform return type for catalog operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"add"``, ``"search"``, ...); selects the renderer.
        data: Operation-specific payload on success.
        warnings: Non-fatal notes for the user.
        error: Structured error when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
