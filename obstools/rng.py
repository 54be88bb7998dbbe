"""Random number generation settings."""

import threading

import numpy as np


class RandomConfig(threading.local):
    def __init__(self):
        super().__init__()
        self.generator = np.random.default_rng()


random_config = RandomConfig()


def seed(value=None):
    """Reseed the default random generator of the current thread.

    Args:
        value (Optional[int]): The seed, `None` pulls fresh entropy
            from the OS.
    """
    random_config.generator = np.random.default_rng(value)


def get_rng(rng=None):
    """Return a :class:`numpy.random.Generator`.

    Args:
        rng (Union[None, int, numpy.random.Generator]):
            `None` for the default generator of the current thread, a
            seed for a new generator, or a generator which is returned
            unchanged.
    """
    if rng is None:
        return random_config.generator
    return np.random.default_rng(rng)
