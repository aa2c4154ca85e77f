"""
================================================================================
Via Fidei - Application Extensions
================================================================================
Wires the content services into the Flask app and bridges async services
into synchronous views.

The services (source cache, aggregator, search engine) are created once per
app in create_app() and stored in app.extensions; views reach them through
get_content_services().
================================================================================
"""

import asyncio
from typing import Any, Awaitable, TypeVar

from flask import current_app

from .content import ContentServices, build_services

EXTENSION_KEY = 'viafidei'

T = TypeVar('T')


def init_content_services(app, services: ContentServices = None) -> ContentServices:
    """Build (or accept) the content services and attach them to the app."""
    if services is None:
        services = build_services(env=app.config)
    app.extensions[EXTENSION_KEY] = services
    return services


def get_content_services() -> ContentServices:
    return current_app.extensions[EXTENSION_KEY]


def run_async(coro: Awaitable[T]) -> T:
    """Run an async coroutine from a synchronous view."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    # Called from inside a running loop (e.g. an async test harness)
    new_loop = asyncio.new_event_loop()
    try:
        return new_loop.run_until_complete(coro)
    finally:
        new_loop.close()
