import random

# Every roll in the game goes through this source so a seeded run replays exactly.
_source = random.Random()


def seed(value):
    _source.seed(value)


def use_source(source):
    """Swap in another random.Random (tests pass a seeded one)."""
    global _source
    _source = source


def random_int(lo, hi):
    """Inclusive uniform integer. Bounds may arrive in either order."""
    if lo > hi:
        lo, hi = hi, lo
    return _source.randint(lo, hi)


def random_element(items):
    items = list(items)
    if not items:
        return None
    return _source.choice(items)


def chance(percent):
    """True with roughly `percent`% probability (roll 1..100 strictly below)."""
    return random_int(1, 100) < percent


def weighted_choice(options, weights):
    """Pick one of options by integer weights."""
    total = sum(weights)
    r = _source.uniform(0, total)
    upto = 0.0
    for option, w in zip(options, weights):
        if upto + w >= r:
            return option
        upto += w
    return options[-1]


def new_id(prefix):
    return f"{prefix}{_source.getrandbits(40):010x}"
