"""Feature modules: organizations, teams, tasks, comments and users."""

from importlib import import_module
from pathlib import Path

import structlog
from fastapi import APIRouter


logger = structlog.get_logger()


def discover_modules() -> list[APIRouter]:
    """Import every module package and collect the ``router`` it exports.

    Packages are visited in name order so route registration is stable.
    """
    modules_dir = Path(__file__).parent
    routers: list[APIRouter] = []

    for path in sorted(modules_dir.iterdir()):
        if path.is_dir() and not path.name.startswith("_"):
            module = import_module(f"taskhub.modules.{path.name}")
            if hasattr(module, "router"):
                routers.append(module.router)
                logger.debug("module_loaded", module=path.name)

    return routers
