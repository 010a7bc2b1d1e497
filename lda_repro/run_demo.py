import logging
import os

import numpy as np

from lda_repro.ldavi.model import LDAModel
from lda_repro.ldavi.sampling import randdoc, random_topics
from lda_repro.ldavi.iteroptim import IterativeSolver
from lda_repro.ldavi.variational import LDAVarInfer, LDAVarInferProblem, infer_corpus, mean_theta
from lda_repro.ldavi.data import build_vocabulary, topic_proportions_frame, vectorize_corpus
from lda_repro.ldavi.viz import plot_top_words, plot_elbo_curve

"""
Demo runner:
- Draw a random topic model and sample synthetic documents from it
- Render the samples as text and load them back through the corpus loader
- Infer per-document topic proportions with variational inference
- Report recovery error, save proportions and diagnostic plots
"""

OUTPUT_DIR = 'output'
V = 200
K = 6
ALPHA = 0.5
N_DOCS = 100
DOC_LEN = 150
SEED = 0

logger = logging.getLogger('run_demo')


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    os.makedirs(OUTPUT_DIR, exist_ok=True)
    rs = np.random.RandomState(SEED)
    model = LDAModel(ALPHA, random_topics(V, K, eta=0.1, random_state=rs))
    vocab = [f'w{v}' for v in range(V)]

    true_thetas = rs.dirichlet(model.alpha, size=N_DOCS)
    sampled = [randdoc(model, th, DOC_LEN, random_state=rs) for th in true_thetas]
    texts = [" ".join(" ".join([vocab[t]] * int(c)) for t, c in zip(d.terms, d.counts))
             for d in sampled]
    seen = build_vocabulary(texts, max_vocab=V, min_df=1)
    logger.info("Sampled %d documents (V=%d, K=%d), %d distinct words used",
                len(texts), V, K, len(seen))
    # model vocabulary order keeps term ids aligned with the topic matrix
    docs = vectorize_corpus(texts, vocab)

    method = LDAVarInfer(maxiter=200, tol=1e-8)
    thetas = infer_corpus(model, docs, method)
    err = np.abs(thetas - true_thetas).sum(axis=1)
    logger.info("Mean L1 error of recovered topic proportions: %.4f", err.mean())

    frame = topic_proportions_frame(thetas)
    csv_path = os.path.join(OUTPUT_DIR, 'demo_theta.csv')
    frame.to_csv(csv_path)

    # objective trajectory of the first document
    solver = IterativeSolver(LDAVarInfer(maxiter=50, tol=0.0, verbosity='final').iter_options())
    sol = solver.solve(LDAVarInferProblem(model, docs[0]))
    logger.info("First document: true theta %s, estimate %s",
                np.round(true_thetas[0], 3), np.round(mean_theta(sol), 3))
    elbo_path = plot_elbo_curve(solver.history, os.path.join(OUTPUT_DIR, 'demo_elbo.png'))
    top_words_path = plot_top_words(OUTPUT_DIR, vocab, model, title='LDA', picname='demo')
    logger.info("Artifacts saved: %s %s %s", csv_path, elbo_path, top_words_path)


if __name__ == '__main__':
    main()
