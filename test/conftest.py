"""
Test configuration for SimpleLang tests
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from parsing import create_tokenizer
from interpreter import create_interpreter


@pytest.fixture
def tokenizer():
  """Provide a fresh whitespace-splitting tokenizer for each test"""
  return create_tokenizer()


@pytest.fixture
def interpreter():
  """Provide a fresh interpreter for each test"""
  return create_interpreter()
