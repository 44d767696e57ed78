"""
Root conftest.py: rende importabile il package 'logitrack' dai test
senza installazione.
"""
import sys
from pathlib import Path

project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
