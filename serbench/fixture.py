"""Benchmark payload shared by every codec."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class Fixture:
    """Fixed-shape record: five integers and one integer sequence."""

    i1: int = 1
    i2: int = 2
    i3: int = 3
    i4: int = 4
    i5: int = 5
    mas: List[int] = field(default_factory=lambda: [1, 2])
