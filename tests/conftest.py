"""
Pytest configuration for the gravitational N-body simulator tests.

This file ensures the orrery package is importable from tests without
installing it.
"""

import sys
from pathlib import Path

# Add src/ to the Python path
src_dir = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_dir))
