#!/usr/bin/env python3
"""
Development startup script.

Starts the reference inventory service in development mode and prints
the settings a storefront needs to reach it.
"""

import os
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

# Project root
PROJECT_ROOT = Path(__file__).parent.parent


def check_dependencies():
    """Check if required dependencies are installed."""
    try:
        import fastapi
        import uvicorn
        import httpx
        import pydantic_settings
        print("✓ All core dependencies installed")
        return True
    except ImportError as e:
        print(f"✗ Missing dependency: {e.name}")
        print("\nRun: pip install -e .")
        return False


def start_service():
    """Start the inventory service and wait for it."""
    load_dotenv(PROJECT_ROOT / ".env")
    host = os.getenv("INVENTORY_SERVICE_HOST", "0.0.0.0")
    port = os.getenv("INVENTORY_SERVICE_PORT", "8001")

    print(f"\n📦 Starting Inventory Service on http://localhost:{port} ...")
    process = subprocess.Popen(
        [
            sys.executable, "-m", "uvicorn",
            "inventory_service.main:app",
            "--reload",
            "--host", host,
            "--port", port,
        ],
        cwd=PROJECT_ROOT,
    )

    print("\n" + "=" * 60)
    print("Service started successfully!")
    print("=" * 60)
    print(f"\n📍 Inventory API: http://localhost:{port}/docs")
    print(f"📍 Storefront:    STOREFRONT_API_BASE_URL=http://localhost:{port}")
    print("\nPress Ctrl+C to stop")
    print("=" * 60)

    try:
        process.wait()
    except KeyboardInterrupt:
        print("\n\nShutting down...")
        process.terminate()
        process.wait()
        print("Service stopped.")


def main():
    print("=" * 60)
    print("Storefront - Development Server")
    print("=" * 60)

    print("\nRunning pre-flight checks...")
    if not check_dependencies():
        sys.exit(1)

    print("\n✓ All checks passed!")
    start_service()


if __name__ == "__main__":
    main()
