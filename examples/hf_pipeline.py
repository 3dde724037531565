#!/usr/bin/env python3
"""Example: StreamLearn learners with HuggingFace Datasets.

This script demonstrates streaming dataset rows into a frequency table and
an online perceptron.
"""

import numpy as np
from datasets import Dataset
from streamlearn.distributions.learner import FrequencyTableLearner
from streamlearn.learners.perceptron import OnlinePerceptron
from streamlearn.integrations.huggingface import DatasetLearner


def create_word_dataset(n_samples=1000, seed=42):
    """Create a dataset of words drawn from a skewed vocabulary."""
    rng = np.random.default_rng(seed)
    vocab = ["the", "of", "and", "to", "in", "is", "it", "that"]
    weights = 1.0 / np.arange(1, len(vocab) + 1)
    words = rng.choice(vocab, size=n_samples, p=weights / weights.sum())
    return Dataset.from_dict({"values": words.tolist()})


def create_labeled_dataset(n_samples=500, n_dims=3, seed=42):
    """Create a linearly separable labeled dataset."""
    rng = np.random.default_rng(seed)
    w_true = rng.normal(size=n_dims)
    X = rng.normal(size=(n_samples, n_dims))
    scores = X @ w_true
    keep = np.abs(scores) > 0.1
    return Dataset.from_dict({
        "features": X[keep].tolist(),
        "label": (scores[keep] > 0).tolist()
    })


def example_frequency_table():
    """Example of learning a word distribution."""
    print("=== Frequency Table Example ===")

    dataset = create_word_dataset()
    table = DatasetLearner(FrequencyTableLearner()).learn(dataset, batch_size=100)

    print(table)
    print(f"Mode: {table.mode()}")
    print(f"Entropy: {table.entropy():.3f} bits")

    pmf = table.probability_function()
    print(f"P('the') = {pmf.probability('the'):.3f}")
    print()


def example_perceptron():
    """Example of training a perceptron over several passes."""
    print("=== Online Perceptron Example ===")

    dataset = create_labeled_dataset()
    learner = OnlinePerceptron()
    ds_learner = DatasetLearner(learner, input_column="features", label_column="label")

    examples = list(zip(dataset["features"], dataset["label"]))
    model = ds_learner.learn(dataset, batch_size=50)
    print(f"After one pass: {learner.count_mistakes(model, examples)} mistakes")

    model = learner.learn_until_converged(examples, model=model)
    print(f"After convergence: {learner.count_mistakes(model, examples)} mistakes")
    print(f"Weights: {model.weights}, bias: {model.bias}")
    print()


def main():
    """Run all examples."""
    print("StreamLearn HuggingFace Integration Examples")
    print("=" * 50)

    try:
        example_frequency_table()
        example_perceptron()

        print("All examples completed successfully!")

    except ImportError as e:
        print(f"Missing optional dependency: {e}")
        print("Install with: pip install streamlearn[hf]")


if __name__ == "__main__":
    main()
