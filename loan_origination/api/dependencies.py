"""Dependency injection for FastAPI endpoints"""

import asyncio
import uuid
from typing import Optional
from fastapi import Request
from loan_origination.config import settings


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


async def apply_response_delay() -> None:
    """Hold the response for the configured artificial latency"""
    if settings.response_delay_seconds > 0:
        await asyncio.sleep(settings.response_delay_seconds)


def parse_id(value: str) -> Optional[uuid.UUID]:
    """Parse a path identifier; malformed ids resolve to None like unknown ones"""
    try:
        return uuid.UUID(value)
    except ValueError:
        return None
