# Variational inference for Latent Dirichlet Allocation with fixed topics.
# Per-document posterior over topic proportions and word-topic assignments
# by coordinate ascent on the evidence lower bound.

from .model import LDAModel, DimensionMismatch
from .data import SDocument, build_vocabulary, vectorize_corpus, topic_proportions_frame
from .iteroptim import IterOptimOptions, IterOptimProblem, IterativeSolver, Verbosity, solve
from .variational import (LDAVarInfer, LDAVarInferProblem, LDAVarInferSolution,
                          IncompatibleSolution, infer, infer_corpus, mean_theta)
from .sampling import randdoc, random_topics
