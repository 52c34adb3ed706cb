#!/usr/bin/env python3
"""
Relief Demo -- chuk-mcp-hillshade

Builds a synthetic terrain (two Gaussian hills and a ridge), loads it into
the session, renders it with both strategies, sweeps the light azimuth the
way a slider would, and writes the PNGs to ./output.

Usage:
    python examples/relief_demo.py
"""

import asyncio
from pathlib import Path

import numpy as np

from tool_runner import ToolRunner

OUTPUT_DIR = Path(__file__).parent / "output"


def synthetic_terrain(size: int = 256) -> np.ndarray:
    y, x = np.mgrid[0:size, 0:size] / (size - 1)
    hills = np.exp(-((x - 0.3) ** 2 + (y - 0.35) ** 2) / 0.02)
    hills += 0.7 * np.exp(-((x - 0.7) ** 2 + (y - 0.6) ** 2) / 0.01)
    ridge = 0.3 * np.exp(-((x + y - 1.0) ** 2) / 0.005)
    return hills + ridge


async def save(runner: ToolRunner, ref: str, name: str) -> None:
    data = await runner.store.retrieve(ref)
    path = OUTPUT_DIR / name
    path.write_bytes(data)
    print(f"  wrote {path}")


async def main() -> None:
    runner = ToolRunner()
    OUTPUT_DIR.mkdir(exist_ok=True)

    terrain = synthetic_terrain()
    loaded = await runner.run(
        "hillshade_load_field", elevation=terrain.tolist(), normalize=True
    )
    print(loaded["message"])

    batch = await runner.run("hillshade_render", strategy="batch")
    frame = await runner.run("hillshade_render", strategy="frame")
    print(f"\nbatch grey range: {batch['value_range']}")
    print(f"frame grey range: {frame['value_range']}")
    await save(runner, batch["artifact_ref"], "batch.png")

    print("\nAzimuth sweep (diffuse lighting):")
    await runner.run("hillshade_set_parameters", diffuse=0.8, specular=0.2)
    for azimuth in (0, 90, 180, 270):
        await runner.run("hillshade_set_parameters", azimuth=azimuth)
        result = await runner.run("hillshade_render", strategy="frame")
        print(f"  azimuth {azimuth:3d}: frame {result['frame_count']}, range {result['value_range']}")
        await save(runner, result["artifact_ref"], f"azimuth_{azimuth:03d}.png")

    print("\nhillshade_sample_pixel (output_mode='text'):")
    print(await runner.run_text("hillshade_sample_pixel", row=80, col=77))


if __name__ == "__main__":
    asyncio.run(main())
