"""Shared test setup."""

import os
import sys

# Make the package and the ``test_utils`` helpers importable from any test directory
_HERE = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.dirname(_HERE))
sys.path.insert(0, _HERE)
