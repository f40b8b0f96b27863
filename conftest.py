"""
Puts the repository root on sys.path so tests can
    from schedule_builder.xxx import yyy
without a prior `pip install -e .`.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))
