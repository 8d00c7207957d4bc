"""Metadata describing a business package."""

from __future__ import annotations

from dataclasses import dataclass
from logging import Logger
from typing import Any, Callable

from fastapi import APIRouter


@dataclass(frozen=True)
class AppPackage:
    """What a business package exposes to the main application."""

    name: str
    api_router: APIRouter
    get_settings: Callable[[], object]
    setup_logging: Callable[[], None]
    logger: Logger
    init_db: Callable[[], None]
    build_workspace: Callable[[], Any]
    create_response: Callable[..., dict]
    http_exception_handler: Callable[..., object]
    generic_exception_handler: Callable[..., object]
