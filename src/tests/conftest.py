"""
Shared fixtures: controllers wired to an in-memory transport
"""
import random
from dataclasses import dataclass, field
from typing import List

import pytest

from led_system import MockTransport
from pattern_system import Controller


@dataclass
class Rig:
    """A controller plus the fakes it was built with"""
    controller: Controller
    transport: MockTransport
    sleeps: List[float] = field(default_factory=list)


@pytest.fixture
def make_rig():
    def _make(pixel_count: int = 5, fail_writes: int = 0, seed: int = 7) -> Rig:
        sleeps: List[float] = []
        opened: List[MockTransport] = []

        def factory(count: int) -> MockTransport:
            transport = MockTransport(count, fail_writes=fail_writes)
            opened.append(transport)
            return transport

        controller = Controller(pixel_count, transport_factory=factory,
                                rng=random.Random(seed), sleep=sleeps.append)
        return Rig(controller, opened[0], sleeps)

    return _make


def lit(pixels) -> List[int]:
    """Indices of pixels that emit light"""
    return [i for i, p in enumerate(pixels) if not p.is_black()]
