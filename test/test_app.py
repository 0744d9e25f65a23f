"""
Test application.

Same factory as production, but the lifespan only wires DI: no tracing
exporter and no table creation.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    container.wire(modules=WIRE_MODULES)
    yield
    container.unwire()


app = create_app(lifespan=lifespan, title_suffix=' (Test)')

__all__ = ['app']
