"""
Variational inference for LDA with fixed topics.

For a model with K topics and a document with n distinct terms, the
per-document variational state is

    gamma       variational Dirichlet parameter (K,)
    elogtheta   E[log theta] under Dirichlet(gamma) (K,)
    phi         per-term topic assignment, column i sums to one (K, n)
    tocweights  topic weights from this document, phi @ counts (K,)

Coordinate ascent alternates gamma = alpha + tocweights with the
gamma-dependent refresh of elogtheta, phi and tocweights. Each sweep
cannot decrease the objective.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np
from scipy.special import digamma, gammaln, xlogy

from .data import SDocument
from .iteroptim import IterOptimOptions, IterOptimProblem, Verbosity, solve
from .model import DimensionMismatch, LDAModel

logger = logging.getLogger(__name__)


class IncompatibleSolution(ValueError):
    pass


@dataclass
class LDAVarInfer:
    maxiter: int = 100
    tol: float = 1e-4
    verbosity: Union[Verbosity, str] = Verbosity.SILENT

    def iter_options(self) -> IterOptimOptions:
        return IterOptimOptions(maxiter=self.maxiter, tol=self.tol, verbosity=self.verbosity)


class LDAVarInferSolution:
    def __init__(self, K: int, nmax: int):
        self.gamma = np.zeros(K)
        self.elogtheta = np.zeros(K)
        self.phi = np.zeros((K, nmax))
        self.tocweights = np.zeros(K)

    @property
    def ntopics(self) -> int:
        return self.gamma.shape[0]

    @property
    def capacity(self) -> int:
        return self.phi.shape[1]


def mean_theta(sol: LDAVarInferSolution) -> np.ndarray:
    return sol.gamma / sol.gamma.sum()


def dirichlet_entropy(gamma: np.ndarray, elogtheta: np.ndarray) -> float:
    # elogtheta must be E[log theta] under Dirichlet(gamma)
    return float(np.sum(gammaln(gamma) - (gamma - 1.0) * elogtheta) - gammaln(gamma.sum()))


def soft_topic_assign(tlogp: np.ndarray, elogtheta: np.ndarray, terms: np.ndarray,
                      counts: np.ndarray, phi: np.ndarray, tocweights: np.ndarray) -> None:
    n = terms.shape[0]
    if n == 0:
        tocweights.fill(0.0)
        return
    phi_n = phi[:, :n]
    np.add(tlogp[:, terms], elogtheta[:, None], out=phi_n)
    # normalize each column in the log domain
    phi_n -= phi_n.max(axis=0)
    np.exp(phi_n, out=phi_n)
    phi_n /= phi_n.sum(axis=0)
    np.dot(phi_n, counts, out=tocweights)


def update_per_gamma(model: LDAModel, doc: SDocument, r: LDAVarInferSolution) -> LDAVarInferSolution:
    """Refresh elogtheta, phi and tocweights from the current gamma."""
    gamma = r.gamma
    elogtheta = r.elogtheta
    dg0 = digamma(gamma.sum())
    digamma(gamma, out=elogtheta)
    elogtheta -= dg0
    soft_topic_assign(model.tlogp, elogtheta, doc.terms, doc.counts, r.phi, r.tocweights)
    return r


@dataclass(frozen=True)
class LDAVarInferProblem(IterOptimProblem):
    model: LDAModel
    doc: SDocument

    def __post_init__(self):
        terms = self.doc.terms
        if terms.size == 0:
            return
        V = self.model.nterms
        if terms.max() >= V:
            raise DimensionMismatch(
                f"document term id {terms.max()} is out of range for a vocabulary of {V} terms")
        # a term with zero probability under every topic has no valid assignment
        unsupported = terms[np.all(np.isneginf(self.model.tlogp[:, terms]), axis=0)]
        if unsupported.size:
            raise ValueError(
                f"terms {unsupported.tolist()} have zero probability under every topic")

    def create_solution(self) -> LDAVarInferSolution:
        return LDAVarInferSolution(self.model.ntopics, self.doc.histlength)

    def check_compatible(self, sol: LDAVarInferSolution) -> None:
        K = self.model.ntopics
        n = self.doc.histlength
        if not (sol.ntopics == K and sol.phi.shape[0] == K and sol.capacity >= n):
            raise IncompatibleSolution(
                f"The LDA problem (K={K}, n={n}) and solution "
                f"(K={sol.ntopics}, capacity={sol.capacity}) are not compatible.")

    def initialize(self, sol: LDAVarInferSolution) -> LDAVarInferSolution:
        self.check_compatible(sol)
        model = self.model
        # spread the document's tokens evenly over the topics
        avg_tocweight = self.doc.sum_counts / model.ntopics
        np.add(model.alpha, avg_tocweight, out=sol.gamma)
        return update_per_gamma(model, self.doc, sol)

    def update(self, sol: LDAVarInferSolution) -> LDAVarInferSolution:
        self.check_compatible(sol)
        # tocweights from the previous sweep, consumed before the refresh overwrites them
        np.add(self.model.alpha, sol.tocweights, out=sol.gamma)
        return update_per_gamma(self.model, self.doc, sol)

    def objective(self, sol: LDAVarInferSolution) -> float:
        model = self.model
        alpha = model.alpha
        terms = self.doc.terms
        h = self.doc.counts
        n = terms.shape[0]

        gamma = sol.gamma
        elogtheta = sol.elogtheta
        phi = sol.phi[:, :n]
        tau = sol.tocweights

        t_lptheta = float(np.dot(alpha - 1.0, elogtheta))
        t_lptoc = float(np.dot(tau, elogtheta))
        gamma_ent = dirichlet_entropy(gamma, elogtheta)

        # entries with phi == 0 contribute nothing (avoids 0 * -inf)
        lp = model.tlogp[:, terms]
        lpw = np.multiply(phi, lp, out=np.zeros_like(lp), where=phi > 0)
        t_lpword = float(np.dot(h, lpw.sum(axis=0)))
        t_phient = -float(np.dot(h, xlogy(phi, phi).sum(axis=0)))

        return t_lptheta + t_lptoc + t_lpword + gamma_ent + t_phient


def infer(model: LDAModel, doc: SDocument, method: Optional[LDAVarInfer] = None,
          solution: Optional[LDAVarInferSolution] = None) -> LDAVarInferSolution:
    method = method if method is not None else LDAVarInfer()
    return solve(LDAVarInferProblem(model, doc), method.iter_options(), solution)


def infer_corpus(model: LDAModel, docs: Sequence[SDocument],
                 method: Optional[LDAVarInfer] = None) -> np.ndarray:
    """
    Run inference on each document in turn, reusing one solution buffer.
    Returns a D x K matrix of mean topic proportions.
    """
    nmax = max((d.histlength for d in docs), default=0)
    sol = LDAVarInferSolution(model.ntopics, nmax)
    thetas = np.zeros((len(docs), model.ntopics))
    for i, doc in enumerate(docs):
        infer(model, doc, method, sol)
        thetas[i] = mean_theta(sol)
    logger.debug("Inferred topic proportions for %d documents (K=%d)", len(docs), model.ntopics)
    return thetas
