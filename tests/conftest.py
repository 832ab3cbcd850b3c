import random

import pytest

from matchwheel.models.participant import Participant


@pytest.fixture
def rng():
    return random.Random(20251017)


@pytest.fixture
def abcd():
    return [Participant(name=n) for n in "ABCD"]
