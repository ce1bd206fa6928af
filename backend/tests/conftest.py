import itertools
import random

import pytest

from cyclesim.services.catalog_service import CatalogRegistry


class ScriptedRandom(random.Random):
    """Random whose ``random()`` replays a fixed cycle of values."""

    def __init__(self, values):
        super().__init__(0)
        self._values = itertools.cycle(values)

    def random(self):
        return next(self._values)


@pytest.fixture(autouse=True)
def _reset_catalog_registry():
    CatalogRegistry.reset()
    yield
    CatalogRegistry.reset()


@pytest.fixture
def quiet_rng():
    """No life event fires and market noise is exactly zero, every cycle."""
    return ScriptedRandom([0.99, 0.5])


@pytest.fixture
def scripted_rng():
    return ScriptedRandom
