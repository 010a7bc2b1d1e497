import numpy as np
import pytest
from lda_repro.ldavi.data import (SDocument, build_vocabulary, tokenize, topic_proportions_frame,
                                  vectorize_corpus)

TEXTS = [
    "Great food and friendly staff. Loved the pizza!",
    "The pizza was cold, the staff was slow.",
    "Friendly staff, great pizza.",
]


def test_sdocument_fields():
    doc = SDocument([3, 0, 7], [2, 1, 4])
    assert doc.histlength == 3
    assert doc.nterms == 3
    assert len(doc) == 3
    assert doc.sum_counts == 7.0
    assert doc.counts.dtype == np.float64


def test_sdocument_from_dict():
    doc = SDocument.from_dict({5: 1, 2: 3})
    assert doc.terms.tolist() == [2, 5]
    assert doc.counts.tolist() == [3.0, 1.0]


@pytest.mark.parametrize('terms,counts', [
    ([0, 0], [1, 1]),
    ([0, 1], [1]),
    ([0, 1], [1, -1]),
    ([-1], [1]),
])
def test_sdocument_rejects_malformed(terms, counts):
    with pytest.raises(ValueError):
        SDocument(terms, counts)


def test_tokenize():
    assert tokenize("Loved the Pizza!") == ['loved', 'the', 'pizza']
    assert tokenize("  ") == []
    assert tokenize("cold,slow") == ['cold', 'slow']


def test_build_vocabulary():
    vocab = build_vocabulary(TEXTS, max_vocab=3, min_df=2)
    assert vocab == ['pizza', 'staff', 'the']


def test_vectorize_corpus():
    vocab = build_vocabulary(TEXTS, min_df=2)
    docs = vectorize_corpus(TEXTS + ["nothing known here"], vocab)
    assert len(docs) == 4
    the = vocab.index('the')
    assert dict(zip(docs[1].terms.tolist(), docs[1].counts.tolist()))[the] == 2.0
    assert docs[3].histlength == 0


def test_rendered_document_loads_back():
    vocab = [f'w{v}' for v in range(6)]
    doc = SDocument([1, 4, 5], [3, 1, 2])
    text = " ".join(" ".join([vocab[t]] * int(c)) for t, c in zip(doc.terms, doc.counts))
    assert build_vocabulary([text], max_vocab=6, min_df=1) == ['w1', 'w5', 'w4']
    (loaded,) = vectorize_corpus([text], vocab)
    assert loaded.terms.tolist() == [1, 4, 5]
    assert loaded.counts.tolist() == [3.0, 1.0, 2.0]


def test_topic_proportions_frame():
    thetas = np.array([[0.2, 0.8], [0.5, 0.5]])
    frame = topic_proportions_frame(thetas, doc_ids=['a', 'b'])
    assert list(frame.columns) == ['topic_0', 'topic_1']
    assert frame.loc['b', 'topic_0'] == 0.5
    assert frame.index.name == 'doc'
