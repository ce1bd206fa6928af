import random
from typing import Optional

from cyclesim.config import settings


def make_rng(seed: Optional[int], salt: Optional[int] = None) -> random.Random:
    """Seeded generator for a request; falls back to DEFAULT_SEED, then to OS entropy.

    ``salt`` (the state's month for cycle calls) is mixed into the seed so chained
    calls under one seed still draw differently each month.
    """
    if seed is None:
        seed = settings.DEFAULT_SEED
    if seed is None:
        return random.Random()
    return random.Random(seed if salt is None else f"{seed}:{salt}")
