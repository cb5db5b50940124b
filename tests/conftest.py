# tests/conftest.py
import sys, pathlib

# Put the repo root on sys.path so `import ta_finder` works without installing
ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
