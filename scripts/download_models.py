#!/usr/bin/env python3
"""CLI utility to inspect and install AI models for SkinScan.

Usage:
    python scripts/download_models.py                         # Show model status
    python scripts/download_models.py --list                  # List models in detail
    python scripts/download_models.py --install weights.pth   # Install trained weights
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.model_manager import DEFAULT_MODEL, get_model_manager


def main():
    parser = argparse.ArgumentParser(description="Manage SkinScan AI models.")
    parser.add_argument("--list", action="store_true", help="List available models.")
    parser.add_argument("--install", metavar="PATH", help="Install a trained weights file.")
    parser.add_argument("--model", default=DEFAULT_MODEL, help="Model to install into.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    mm = get_model_manager()

    if args.install:
        try:
            target = mm.install_model(args.model, args.install)
        except (ValueError, FileNotFoundError) as e:
            print(f"Install failed: {e}")
            sys.exit(1)
        print(f"Installed {args.model} -> {target}")
        return

    if args.list:
        print("Available models:")
        print("-" * 60)
        for model in mm.get_registry():
            available = mm.is_model_available(model.name)
            status = "Installed" if available else "Not Installed"
            print(f"  {model.display_name}")
            print(f"    Name: {model.name}")
            print(f"    Architecture: {model.architecture} ({model.num_classes} classes)")
            print(f"    Size: ~{model.size_mb:.0f} MB")
            print(f"    Path: {mm.get_model_path(model.name)}")
            print(f"    Status: {status}")
            print()
        print(f"Total installed: {mm.get_total_size_formatted()}")
        return

    print("SkinScan Model Status")
    print("=" * 40)
    for model in mm.get_registry():
        if mm.is_model_available(model.name):
            print(f"  [OK] {model.display_name}")
        else:
            print(f"  [MISSING] {model.display_name}: install with --install PATH")
    print()
    print("Done.")


if __name__ == "__main__":
    main()
