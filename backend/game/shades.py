"""Random shade selection."""

from __future__ import annotations

import random
from typing import Sequence


def pick_random_shade(shades: Sequence[str], rng: random.Random) -> str:
    """
    Return one shade with uniform probability 1/len(shades).

    Raises:
        ValueError if shades is empty (the color was never configured).
    """
    if not shades:
        raise ValueError("cannot pick a shade from an empty palette entry")
    return shades[rng.randrange(len(shades))]
