# turnkit/runtime/resources.py
import os
import pickle
from functools import lru_cache


@lru_cache(maxsize=8)
def _load_cached(file: str):
    with open(file, "rb") as f:
        return pickle.load(f)


def load_pickle(file: str, must_exist: bool = True):
    # a missing file is not cached, so it is picked up once it appears
    if not os.path.exists(file):
        if must_exist:
            raise FileNotFoundError(file)
        return None
    return _load_cached(file)
