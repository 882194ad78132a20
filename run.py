"""
Entry Point Script (Bootstrap)
==============================
Development runner that works without installing the package.

Why is this file needed?
------------------------
1. It is located outside the 'src' package to act as a convenient runner.
2. It modifies 'sys.path' so imports like 'from orbitview.model...' resolve.

Usage:
    $ python run.py [path/to/scene.json]
"""
import sys
import os

# Add the 'src' directory to the Python path
current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from orbitview.main import main

if __name__ == "__main__":
    main()
