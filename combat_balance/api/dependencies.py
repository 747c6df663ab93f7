"""FastAPI dependency injection — exposes per-app service settings."""

from __future__ import annotations

from fastapi import Request

from combat_balance.config import ApiLimits


def get_limits(request: Request) -> ApiLimits:
    limits = getattr(request.app.state, "limits", None)
    if limits is None:
        raise RuntimeError("ApiLimits not initialized — app not built via create_app().")
    return limits
