#!/usr/bin/env python3
"""
Capabilities Demo -- chuk-mcp-hillshade

Quick-start script showing what the server can do. Lists registered tools,
server status, full capabilities, and demonstrates the dual output mode
(JSON vs text).

Usage:
    python examples/capabilities_demo.py
"""

import asyncio

from tool_runner import ToolRunner


async def main() -> None:
    runner = ToolRunner()

    print("=" * 60)
    print("chuk-mcp-hillshade -- Server Capabilities")
    print("=" * 60)

    print(f"\nRegistered tools ({len(runner.tool_names)}):")
    for name in sorted(runner.tool_names):
        print(f"  - {name}")

    caps = await runner.run("hillshade_capabilities")
    print("\nCapabilities:")
    print(f"  Strategies: {', '.join(caps['strategies'])} (default {caps['default_strategy']})")
    print(f"  Parameters: {', '.join(caps['parameters'])}")
    for name, value in caps["default_parameters"].items():
        print(f"    {name:16s} {value:g}")
    print(f"  Output formats: {', '.join(caps['output_formats'])}")
    print(f"  Guidance: {caps['llm_guidance']}")

    print("\n" + "-" * 60)
    print("Dual Output Mode Demo")
    print("-" * 60)

    print("\nhillshade_status (output_mode='text'):")
    print(await runner.run_text("hillshade_status"))

    print("\nhillshade_get_parameters (output_mode='text'):")
    print(await runner.run_text("hillshade_get_parameters"))


if __name__ == "__main__":
    asyncio.run(main())
