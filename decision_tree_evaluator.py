# default tree packages
import logging
import numpy as np
import pandas as pd
# quality of life packages
from typing import List, Optional, Tuple
# displays a nice graph
from matplotlib import pyplot as plt

from node import Node
from decision_tree import DecisionTree, InvalidInput
from flower_reader import samples_to_frame
from sample import Sample

logger = logging.getLogger(__name__)


class DecisionTreeEvaluator:

    @staticmethod
    def validation_split(samples: List[Sample], begin: int, end: int) -> Tuple[List[Sample], List[Sample]]:
        """
        Holds out a contiguous slice of the samples for validation.

        Parameters:
            samples (List[Sample]): All samples, in input order.
            begin (int): Index of the first validation sample.
            end (int): One past the index of the last validation sample.

        Returns:
            Tuple[List[Sample], List[Sample]]: The training samples (input order, slice removed) and the validation
            samples.
        """

        if not 0 <= begin <= end <= len(samples):
            raise InvalidInput(f"validation range [{begin}, {end}) does not fit {len(samples)} samples")
        return samples[:begin] + samples[end:], samples[begin:end]

    @staticmethod
    def accuracy(y_actual: pd.Series, y_predict: pd.Series) -> float:
        """
        Compares the predicted class codes to the actual class codes for an accuracy score.

        Parameters:
            y_actual (pd.Series): The actual y values.
            y_predict (pd.Series): Predicted y values.

        Returns:
            float: Accuracy; defined as the proportion of correct predictions to total predictions.
        """

        total_predictions = len(y_actual)
        if total_predictions <= 0:
            return 0.0

        correct_predictions = (y_actual.values == y_predict.values).astype(int).sum()
        accuracy = correct_predictions / total_predictions
        return float(accuracy)

    @staticmethod
    def predict(decision_tree: Node, samples: List[Sample]) -> pd.Series:
        """
        Predict the class for each sample using the given decision tree.

        Parameters:
            decision_tree: The root of the decision tree to use for prediction.
            samples: The samples to make predictions for.

        Returns:
            A series of predicted class codes, one for each sample.
        """

        return pd.Series([int(decision_tree.classify(sample)) for sample in samples], dtype=int)

    @staticmethod
    def labels(samples: List[Sample]) -> pd.Series:
        return samples_to_frame(samples)["class"]

    @classmethod
    def score(cls, decision_tree: Node, samples: List[Sample]) -> Tuple[int, int]:
        """
        Counts the samples the tree classifies correctly.

        Returns:
            Tuple[int, int]: Correct predictions and total predictions.
        """

        y_actual = cls.labels(samples)
        y_predict = cls.predict(decision_tree, samples)
        correct = int((y_actual.values == y_predict.values).sum())
        return correct, len(samples)

    @classmethod
    def evaluate(cls, tree_model: DecisionTree, samples: List[Sample], begin: int, end: int, max_depth: int,
                 position: str = "") -> dict:
        """
        Trains on everything outside [begin, end) and scores the tree on both partitions.

        Parameters:
            tree_model (DecisionTree): The decision tree model to be trained and evaluated.
            samples (List[Sample]): All samples, in input order.
            begin (int): Index of the first validation sample.
            end (int): One past the index of the last validation sample.
            max_depth (int): Maximum depth of the decision tree.
            position (str): Position label of the root.

        Returns:
            dict: The trained root under "tree", and (correct, total) pairs under "train" and "validation".
        """

        train, validation = cls.validation_split(samples, begin, end)
        logger.info("%d training samples, %d validation samples", len(train), len(validation))
        decision_tree = tree_model.train(train, max_depth, position)
        info = {"tree": decision_tree, "train": cls.score(decision_tree, train),
                "validation": cls.score(decision_tree, validation)}
        logger.info("train accuracy %d/%d, validation accuracy %d/%d", *info["train"], *info["validation"])
        return info

    @classmethod
    def depth_curve(cls, tree_model: DecisionTree, samples: List[Sample], begin: int, end: int, max_depth: int,
                    position: str = "") -> np.array:
        """
        Trains one tree per maximum depth from 0 to max_depth and records both accuracies.

        Returns:
            np.array: One row per depth holding the depth, the training accuracy and the validation accuracy. An
            empty validation slice scores 0.0.
        """

        if max_depth < 0:
            raise InvalidInput(f"maximum depth must be non-negative, got {max_depth}")
        train, validation = cls.validation_split(samples, begin, end)
        curve = np.empty([max_depth + 1, 3])
        for depth in range(max_depth + 1):
            decision_tree = tree_model.train(train, depth, position)
            train_accuracy = cls.accuracy(cls.labels(train), cls.predict(decision_tree, train))
            validation_accuracy = cls.accuracy(cls.labels(validation), cls.predict(decision_tree, validation))
            curve[depth] = [depth, train_accuracy, validation_accuracy]
        return curve

    @staticmethod
    def display_depth_curve(curve: np.array, title: str = "", filename: Optional[str] = None) -> None:
        """
        Plots training and validation accuracy against maximum depth.

        Parameters:
            curve (np.array): Rows of (depth, training accuracy, validation accuracy).
            title (str): Titles the graph.
            filename (str, optional): Saves the figure here instead of showing it.
        """

        depths = curve[:, 0]
        for column, label, colour in ((1, "train", "red"), (2, "validation", "blue")):
            plt.plot(depths, curve[:, column], color=colour, marker="o", label=label)

        plt.title("Accuracy by Maximum Depth" if title == "" else title)
        plt.xlabel("maximum depth")
        plt.ylabel("accuracy")
        plt.ylim(0, 1.05)
        plt.grid()
        plt.legend()
        if filename is None:
            plt.show()
        else:
            plt.savefig(filename)
            plt.close()
