#!/usr/bin/env python
"""
Start the pricing API with uvicorn.

Usage:
    python scripts/run_api.py [--host 0.0.0.0] [--port 8000] [--no-reload]
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path


def main():
    parser = argparse.ArgumentParser(description="Run the Cost Pricing API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload on code changes")
    args = parser.parse_args()

    project_root = Path(__file__).parent.parent
    src_path = str(project_root / "src")

    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(p for p in (src_path, env.get("PYTHONPATH")) if p)

    command = [
        sys.executable, "-m", "uvicorn", "cost_pricing.api.main:app",
        "--host", args.host,
        "--port", str(args.port),
    ]
    if not args.no_reload:
        command += ["--reload", "--reload-dir", src_path]

    print(f"Starting Cost Pricing API on http://{args.host}:{args.port} ...")
    try:
        subprocess.run(command, env=env, cwd=project_root)
    except KeyboardInterrupt:
        print("\nAPI stopped.")


if __name__ == "__main__":
    main()
