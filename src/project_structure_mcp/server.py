"""
Project Structure MCP Server
============================

This MCP server:
- Analyzes a TypeScript/JavaScript project directory and returns its
  directory/file tree with ids, creation timestamps and language tags.
- Reports the compiler options that would apply to the project
  (defaults overlaid by the project's tsconfig.json).

Run:
  mcp dev src/project_structure_mcp/server.py
or:
  python -m project_structure_mcp.server

Notes:
- Settings are read once at startup from $PROJECT_STRUCTURE_CONFIG
  (default ./project_structure.yaml).
- Logs go to stderr; stdout carries the stdio transport.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from typing import Any

from mcp.server.fastmcp import FastMCP

from .assembler import analyze_project as run_analysis
from .config_loader import AnalyzerSettings, load_settings
from .tsconfig import resolve_config

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict]:
    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info(
        "Starting project structure server (sort_children=%s, max_depth=%s)",
        settings.sort_children, settings.max_depth,
    )
    yield {"settings": settings}


mcp = FastMCP(
    name="ProjectStructure",
    lifespan=app_lifespan,
)


def _ctx():
    ctx = mcp.get_context()
    return ctx.request_context.lifespan_context


@mcp.tool(title="Analyze project", description="Return the directory/file tree of a project with ids, timestamps and language tags.")
def analyze_project(project_path: str = "") -> dict[str, Any]:
    if not project_path:
        raise ValueError("No projectPath provided")
    settings: AnalyzerSettings = _ctx()["settings"]
    project = run_analysis(project_path, settings)
    if project is None:
        raise RuntimeError("Failed to analyze project")
    return project.to_dict()


@mcp.tool(title="Resolve compiler config", description="Show the compiler options that apply to a project and any tsconfig.json diagnostics.")
def resolve_compiler_config(project_path: str = "") -> dict[str, Any]:
    if not project_path:
        raise ValueError("No projectPath provided")
    return resolve_config(project_path).to_dict()


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    # Direct execution (stdio transport)
    main()
