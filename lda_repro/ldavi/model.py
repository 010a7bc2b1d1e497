import numpy as np
from typing import Union


class DimensionMismatch(ValueError):
    pass


class LDAModel:
    """
    LDA topic model with fixed topics.

    topics: V x K matrix, column k is the word distribution of topic k
    alpha:  Dirichlet prior over topic proportions, a length-K vector or
            a scalar (symmetric prior)
    """

    def __init__(self, alpha: Union[float, np.ndarray], topics: np.ndarray):
        topics = np.array(topics, dtype=np.float64)
        if topics.ndim != 2:
            raise DimensionMismatch(f"topics must be a V x K matrix, got shape {topics.shape}")
        K = topics.shape[1]
        if np.ndim(alpha) == 0:
            alpha = np.full(K, float(alpha))
        else:
            alpha = np.array(alpha, dtype=np.float64)
        if alpha.ndim != 1 or alpha.shape[0] != K:
            raise DimensionMismatch(
                f"prior has length {alpha.size} but the topic matrix has {K} topics")
        if np.any(alpha <= 0):
            raise ValueError("Dirichlet prior parameters must be positive.")

        self.alpha = alpha
        self.topics = topics
        # K x V, log P(w | k); zero probabilities map to -inf
        with np.errstate(divide='ignore'):
            self.tlogp = np.log(topics.T)
        for a in (self.alpha, self.topics, self.tlogp):
            a.setflags(write=False)

    @property
    def nterms(self) -> int:
        return self.topics.shape[0]

    @property
    def ntopics(self) -> int:
        return self.topics.shape[1]

    def __repr__(self):
        return f"LDAModel(nterms={self.nterms}, ntopics={self.ntopics})"
