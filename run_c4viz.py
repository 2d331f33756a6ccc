#!/usr/bin/env python3
"""
Wrapper script to run C4Viz directly from the project directory.

This script allows you to run C4Viz without installing it:
    python run_c4viz.py export examples/model.json
    python run_c4viz.py list-systems examples/model.json
    python run_c4viz.py --help
"""

import sys
from pathlib import Path

# Add src directory to Python path so we can import c4viz
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

try:
    from c4viz.cli import main
except ImportError as e:
    print(f"Error importing c4viz: {e}")
    print("\nInstall the dependencies first:")
    print("   pip install -e .")
    sys.exit(1)

if __name__ == "__main__":
    main()
