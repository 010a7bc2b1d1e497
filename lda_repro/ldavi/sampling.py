import numpy as np
from typing import Optional, Union

from .data import SDocument
from .model import DimensionMismatch, LDAModel

RandomStateLike = Optional[Union[int, np.random.RandomState]]


def _as_random_state(random_state: RandomStateLike) -> np.random.RandomState:
    if isinstance(random_state, np.random.RandomState):
        return random_state
    return np.random.RandomState(random_state)


def randdoc(model: LDAModel, theta: np.ndarray, length: int,
            random_state: RandomStateLike = None) -> SDocument:
    """
    Draw a document of `length` tokens from the mixture model.topics @ theta.
    Only terms with non-zero counts are kept.
    """
    theta = np.asarray(theta, dtype=np.float64)
    if theta.shape != (model.ntopics,):
        raise DimensionMismatch(
            f"theta has shape {theta.shape}, expected ({model.ntopics},)")
    if length < 0:
        raise ValueError("document length must be non-negative.")
    rs = _as_random_state(random_state)
    p = model.topics @ theta
    p = p / p.sum()
    wcounts = rs.multinomial(length, p)
    ts = np.flatnonzero(wcounts)
    return SDocument(ts, wcounts[ts])


def random_topics(V: int, K: int, eta: float = 0.1,
                  random_state: RandomStateLike = None) -> np.ndarray:
    # V x K, each column drawn from a symmetric Dirichlet(eta)
    rs = _as_random_state(random_state)
    return rs.dirichlet(np.full(V, eta), size=K).T
