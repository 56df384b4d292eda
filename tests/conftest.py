# =============================================================================
# conftest.py - Shared Fixtures
# =============================================================================
# The iterative Fibonacci program is the reference document used across
# the suite; its expected encodings are given for both layouts.
# =============================================================================

import pytest


FIB_SOURCE = """\
Iterative Fibonacci.
Leaves fib(N) in slot B; A and RETURN share slot 00.
---
N      0f   # iterations
A      00
B      01
SUM    02
RETURN 00
---
      res           # counter = 0
      vtoa 0
      ator A
      vtoa 1
      ator B
LOOP: ctoa
      jumpr N DONE  # stop once counter == N
      rtoa A
      accr B
      ator SUM
      rtoa B
      ator A
      rtoa SUM
      ator B
      inc
      setpc LOOP
DONE: halt
"""

FIB_FIXED = (
    "C4 00 00 D1 00 00 D2 00 00 D1 01 00 D2 01 00 C5 00 00 B2 0F 30 "
    "D0 00 00 C0 01 00 D2 02 00 D0 01 00 D2 00 00 D0 02 00 D2 01 00 "
    "C2 00 00 B1 0F 00 00 00 00"
)

FIB_PACKED = (
    "C4 D1 00 D2 00 D1 01 D2 01 C5 B2 0F 1E D0 00 C0 01 D2 02 "
    "D0 01 D2 00 D0 02 D2 01 C2 B1 09 00"
)


@pytest.fixture
def fib_source() -> str:
    """The Fibonacci document."""
    return FIB_SOURCE


@pytest.fixture
def fib_file(tmp_path):
    """The Fibonacci document written to fib.mx in a temporary directory."""
    path = tmp_path / "fib.mx"
    path.write_text(FIB_SOURCE)
    return path
