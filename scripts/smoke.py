import asyncio
import json
import os
import sys
from pathlib import Path

from mcp.client.session import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client


def _to_jsonable(obj):
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "dict"):
        return obj.dict()
    return {"value": str(obj)}


async def main() -> None:
    root = Path(__file__).resolve().parents[1]
    target = sys.argv[1] if len(sys.argv) > 1 else str(root)
    env = os.environ.copy()
    env["PYTHONPATH"] = str(root / "src")

    params = StdioServerParameters(
        command=sys.executable,
        args=["-m", "project_structure_mcp.server"],
        env=env,
        cwd=str(root),
    )

    async with stdio_client(params) as (read, write):
        async with ClientSession(read, write) as session:
            await session.initialize()
            config = await session.call_tool("resolve_compiler_config", {"project_path": target})
            structure = await session.call_tool("analyze_project", {"project_path": target})

    print(
        json.dumps(
            {
                "config": _to_jsonable(config),
                "structure": _to_jsonable(structure),
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    asyncio.run(main())
