import re
import string
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd


class SDocument:
    """
    Sparse bag-of-words document: distinct term ids and their counts.
    """

    def __init__(self, terms: Sequence[int], counts: Sequence[float]):
        terms = np.array(terms, dtype=np.int64)
        counts = np.array(counts, dtype=np.float64)
        if terms.ndim != 1 or counts.ndim != 1 or terms.shape != counts.shape:
            raise ValueError("terms and counts must be 1-D sequences of equal length.")
        if np.any(terms < 0):
            raise ValueError("term ids must be non-negative.")
        if np.unique(terms).size != terms.size:
            raise ValueError("term ids must be distinct within a document.")
        if np.any(counts < 0):
            raise ValueError("counts must be non-negative.")
        terms.setflags(write=False)
        counts.setflags(write=False)
        self.terms = terms
        self.counts = counts
        self.sum_counts = float(counts.sum())

    @classmethod
    def from_dict(cls, counts: Dict[int, float]) -> 'SDocument':
        ts = sorted(counts)
        return cls(ts, [counts[t] for t in ts])

    @property
    def histlength(self) -> int:
        # number of distinct terms
        return self.terms.shape[0]

    nterms = histlength

    def __len__(self):
        return self.histlength

    def __repr__(self):
        return f"SDocument(n={self.histlength}, sum_counts={self.sum_counts:g})"


_STRIP_PUNCT = str.maketrans(string.punctuation, " " * len(string.punctuation))


def tokenize(text: str) -> List[str]:
    # punctuation separates tokens
    return re.findall(r"\S+", text.lower().translate(_STRIP_PUNCT))


def build_vocabulary(texts: Iterable[str], max_vocab: int = 5000, min_df: int = 5) -> List[str]:
    """
    Words appearing in at least `min_df` documents, most frequent first
    (ties alphabetical), truncated to `max_vocab`.
    """
    term_freq: Counter = Counter()
    doc_freq: Counter = Counter()
    for text in texts:
        toks = tokenize(text)
        term_freq.update(toks)
        doc_freq.update(set(toks))
    kept = sorted((w for w, d in doc_freq.items() if d >= min_df),
                  key=lambda w: (-term_freq[w], w))
    return kept[:max_vocab]


def vectorize_corpus(texts: Iterable[str], vocab: List[str]) -> List[SDocument]:
    index: Dict[str, int] = {w: i for i, w in enumerate(vocab)}
    docs: List[SDocument] = []
    for text in texts:
        counts: Dict[int, int] = {}
        for w in tokenize(text):
            if w in index:
                idx = index[w]
                counts[idx] = counts.get(idx, 0) + 1
        docs.append(SDocument.from_dict(counts))
    return docs


def topic_proportions_frame(thetas: np.ndarray, doc_ids: Optional[Sequence] = None) -> pd.DataFrame:
    """
    thetas: D x K matrix of per-document topic proportions
    """
    thetas = np.atleast_2d(np.asarray(thetas, dtype=np.float64))
    cols = [f'topic_{k}' for k in range(thetas.shape[1])]
    frame = pd.DataFrame(thetas, columns=cols)
    if doc_ids is not None:
        frame.index = pd.Index(list(doc_ids), name='doc')
    else:
        frame.index.name = 'doc'
    return frame
