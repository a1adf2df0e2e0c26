from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for imports like `neldermead.*`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _is_pytest_handler(handler: logging.Handler) -> bool:
    return type(handler).__module__.startswith('_pytest')


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way it was after a test reconfigures it."""
    root = logging.getLogger()
    # pytest's capture handlers are attached per phase; leave those to pytest
    handlers = [h for h in root.handlers if not _is_pytest_handler(h)]
    level = root.level
    yield root
    current = list(root.handlers)
    for handler in current:
        if handler not in handlers and not _is_pytest_handler(handler):
            handler.close()
    root.handlers[:] = handlers + [h for h in current if _is_pytest_handler(h)]
    root.setLevel(level)
