import random

import pytest

from primegen.miller_rabin import MillerRabinTester


@pytest.fixture()
def seeded_tester() -> MillerRabinTester:
    return MillerRabinTester(rng=random.Random(1234))
