import os
from typing import List, Sequence

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from .model import LDAModel

sns.set_style('whitegrid')


def plot_top_words(output_dir: str, vocab: Sequence[str], model: LDAModel, picname: str,
                   title: str, topn: int = 12) -> str:
    os.makedirs(output_dir, exist_ok=True)
    beta_matrix = model.topics.T  # K x V
    K, V = beta_matrix.shape
    topn = min(topn, V)
    fig, axes = plt.subplots(K, 1, figsize=(12, 3*K), dpi=120, constrained_layout=True,
                             squeeze=False)
    for k in range(K):
        b = beta_matrix[k]
        idx = np.argsort(b)[-topn:][::-1]
        words = [vocab[i] for i in idx]
        ax = axes[k, 0]
        ax.bar(words, b[idx], color='#5178c6')
        ax.set_title(f"Topic {k+1}: Top {topn} Words")
        plt.setp(ax.get_xticklabels(), rotation=45, ha='right')
    fig.suptitle(title, fontsize=14)
    out_path = os.path.join(output_dir, f'{picname}_top_words.png')
    plt.savefig(out_path, bbox_inches='tight')
    plt.close(fig)
    return out_path


def plot_elbo_curve(elbo_list: List[float], out_path: str) -> str:
    fig, ax = plt.subplots(figsize=(10, 6), dpi=120)
    ax.plot(np.arange(len(elbo_list)), elbo_list, color='#2563eb', lw=2, marker='o', ms=3)
    ax.set_title('ELBO convergence')
    ax.set_xlabel('Iteration', labelpad=10)
    ax.set_ylabel('ELBO', labelpad=10)
    fig.tight_layout(pad=2.0)
    plt.savefig(out_path, bbox_inches='tight')
    plt.close(fig)
    return out_path
