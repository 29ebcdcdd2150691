# default tree packages
import logging
import numpy as np
# quality of life packages
from typing import List, Optional, Sequence, Tuple
# displays a nice graph
from graphviz import Digraph
from matplotlib.colors import to_hex, to_rgb

from node import Node
from sample import Feature, FlowerClass, Sample

logger = logging.getLogger(__name__)


class InvalidInput(ValueError):
    """Raised when a tree cannot be trained from the given partition or settings."""


class DecisionTree:

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Parameters:
            rng (np.random.Generator, optional): Source used to break ties between majority classes. Defaults to a
            generator seeded from fresh OS entropy.
        """

        self.rng = rng if rng is not None else np.random.default_rng()

    @staticmethod
    def _entropy(counts: Sequence[int], tolerance: float = 1e-8) -> float:
        """
        Calculate the entropy of a class distribution given as per-class counts.

        Parameters:
            counts (Sequence[int]): Number of samples of each class.
            tolerance (float): Tolerance for entropy threshold.

        Returns:
            float: Entropy value.
        """

        frequencies = np.asarray(counts, dtype=float)
        samples = frequencies.sum()
        if samples == 0:
            return 0.0
        frequencies = frequencies[frequencies > 0]  # 0 * log2(0) is taken as 0
        total = np.dot(frequencies, np.log2(frequencies))
        entropy = np.log2(samples) - total / samples  # slightly different approach to traditional method
        return 0.0 if entropy < tolerance else float(entropy)

    def _information_gain(self, left_counts: Sequence[int], right_counts: Sequence[int],
                          tolerance: float = 1e-8) -> float:
        """
        Calculates the information gain of splitting a node into two sides with the given class counts.

        Parameters:
            left_counts (Sequence[int]): Per-class counts of the samples sent left.
            right_counts (Sequence[int]): Per-class counts of the samples sent right.
            tolerance (float): Gains below this are reported as exactly zero.

        Returns:
            information_gain (float): Parent entropy minus the size-weighted entropy of both sides. Zero when either
            side is empty.
        """

        left_counts = np.asarray(left_counts)
        right_counts = np.asarray(right_counts)
        left_samples = left_counts.sum()
        right_samples = right_counts.sum()
        if left_samples == 0 or right_samples == 0:
            return 0.0

        samples = left_samples + right_samples
        parent_entropy = self._entropy(left_counts + right_counts)
        split_entropy = (left_samples / samples * self._entropy(left_counts)
                         + right_samples / samples * self._entropy(right_counts))

        information_gain = parent_entropy - split_entropy
        return 0.0 if information_gain < tolerance else float(information_gain)

    @staticmethod
    def _midpoint(lower: float, upper: float) -> float:
        """
        Threshold between two adjacent sorted values, satisfying lower < threshold <= upper.

        Values are halved before adding so the sum stays finite. Adjacent floats round back onto lower, in which case
        upper itself is the threshold.
        """

        threshold = float(lower) / 2 + float(upper) / 2
        return threshold if lower < threshold <= upper else float(upper)

    def _best_split_value(self, samples: List[Sample], feature: Feature) -> dict:
        """
        Finds the best split point for one feature of a node's samples.

        Split points are only considered between adjacent sorted samples whose values differ.

        Parameters:
            samples (List[Sample]): The node's samples.
            feature (Feature): The feature to split on.

        Returns:
            dict: Contains the best split value (midpoint of the two adjacent values), its information gain, the index
            into the sorted samples where the right side begins, and the sorted samples themselves. If no split point
            produces a positive information gain, the split value and index are None and the gain is 0.0.
        """

        ordered = sorted(samples, key=lambda sample: sample.feature(feature))
        best_split = {"split_value": None, "information_gain": 0.0, "index": None, "samples": ordered}
        if len(ordered) < 2:
            return best_split

        values = np.array([sample.feature(feature) for sample in ordered])
        labels = np.array([sample.class_label for sample in ordered], dtype=int)
        prefix_counts = np.cumsum(np.eye(len(FlowerClass), dtype=int)[labels], axis=0)
        total_counts = prefix_counts[-1]

        for index in np.flatnonzero(values[1:] != values[:-1]) + 1:
            left_counts = prefix_counts[index - 1]
            information_gain = self._information_gain(left_counts, total_counts - left_counts)
            if information_gain > best_split["information_gain"]:  # first seen wins ties
                best_split["split_value"] = self._midpoint(values[index - 1], values[index])
                best_split["information_gain"] = information_gain
                best_split["index"] = int(index)

        return best_split

    def _majority_class(self, counts: Sequence[int]) -> Tuple[FlowerClass, bool]:
        """
        Picks the class a leaf represents.

        The largest count wins. If the largest count is shared by two or three classes, one of them is drawn
        uniformly from self.rng. A tie among the smaller counts never triggers a draw.

        Parameters:
            counts (Sequence[int]): Number of samples of each class.

        Returns:
            Tuple[FlowerClass, bool]: The chosen class and whether it came from a random draw.
        """

        most = max(counts)
        tied = [target for target, count in zip(FlowerClass, counts) if count == most]
        if len(tied) == 1:
            return tied[0], False
        return tied[self.rng.integers(len(tied))], True

    def _construct_leaf(self, node: Node) -> None:
        """
        Constructs a leaf node in the decision tree based on the class counts of its samples.

        Parameters:
            node (Node): The node to be constructed as a leaf.
        """

        counts = node.class_counts()
        node.leaf_val, drawn = self._majority_class(counts)
        node.feature = node.threshold = node.information_gain = None
        node.left = node.right = None
        logger.debug("leaf at %s: counts=%s class=%s%s", node.position or "Root", counts, node.leaf_val.name,
                     " (tie broken at random)" if drawn else "")

    def build(self, node: Node, max_depth: int) -> Node:
        """
        Recursively turns an open node into a finished subtree.

        Parameters:
            node (Node): An open node holding a non-empty partition.
            max_depth (int): Position length at which nodes are forced to become leaves.

        Returns:
            Node: The same node, now a leaf or an internal node with two built children.
        """

        if not node.is_open():
            raise RuntimeError(f"node at {node.position or 'Root'} has already been built")
        if not node.samples:
            raise InvalidInput(f"cannot build a node with no samples at {node.position or 'Root'}")

        counts = node.class_counts()
        if max(counts) == len(node.samples):  # stopping criteria: pure leaf
            self._construct_leaf(node)
            return node

        if node.depth >= max_depth:  # stopping criteria: max depth reached
            self._construct_leaf(node)
            return node

        best_feature, best_split = None, None
        for feature in Feature:
            split = self._best_split_value(node.samples, feature)
            best_information_gain = best_split["information_gain"] if best_split is not None else 0.0
            if split["information_gain"] > best_information_gain:  # prioritizes earliest feature
                best_feature, best_split = feature, split

        if best_split is None:  # stopping criteria: no split separates the classes
            self._construct_leaf(node)
            return node

        node.feature = best_feature
        node.threshold = best_split["split_value"]
        node.information_gain = best_split["information_gain"]
        ordered, index = best_split["samples"], best_split["index"]
        node.left = Node(ordered[:index], node.position + "L")
        node.right = Node(ordered[index:], node.position + "R")
        logger.debug("split at %s: %s < %.3f gain=%.4f (%d left, %d right)", node.position or "Root",
                     best_feature.name, node.threshold, node.information_gain, index, len(ordered) - index)

        self.build(node.left, max_depth)
        self.build(node.right, max_depth)
        return node

    def train(self, samples: List[Sample], max_depth: int, position: str = "") -> Node:
        """
        Trains a decision tree classifier.

        Parameters:
            samples (List[Sample]): The training set.
            max_depth (int): Maximum number of edges between the root and any leaf.
            position (str): Position label of the root. Its length is added to max_depth.

        Returns:
            Node: The root node of the trained decision tree.
        """

        if max_depth < 0:
            raise InvalidInput(f"maximum depth must be non-negative, got {max_depth}")
        if len(samples) == 0:
            raise InvalidInput("training partition is empty")

        logger.info("training on %d samples with maximum depth %d", len(samples), max_depth)
        return self.build(Node(samples, position), max_depth + len(position))

    @staticmethod
    def dump_tree(decision_tree: Node) -> str:
        """
        Writes every node of the tree, parents before children and left before right.

        Each node reports its feature (or class code for a leaf), its threshold, its position and the samples it
        holds.

        Parameters:
            decision_tree (Node): The root node of the decision tree.

        Returns:
            str: The dump, one field or sample per line.
        """

        lines = []
        for node in decision_tree.walk():
            if node.feature is not None:
                node_id, threshold = node.feature.name, node.threshold
            else:
                node_id, threshold = str(int(node.leaf_val)) if node.is_leaf() else "", 0.0
            lines.append("")
            lines.append(f"Node ID:\t{node_id}")
            lines.append(f"Threshold:\t{threshold:.2f}")
            lines.append(f"Position:\t{node.position or 'Root'}")
            lines.extend(str(sample) for sample in node.samples)
        return "\n".join(lines)

    @staticmethod
    def to_digraph(decision_tree: Node, root_colour: str = "#eb4034", leaf_colour: str = "#50ff50") -> Digraph:
        """
        Builds a coloured Digraph of the decision tree. Edges to left children are labeled T, to right children F.

        Nodes fade from root_colour to leaf_colour with depth, staying close to root_colour until the last levels.

        Parameters:
            decision_tree (Node): The root node of the decision tree.
            root_colour (str): Hex colour of the root nodes.
            leaf_colour (str): Hex colour of the deepest leaves.

        Returns:
            Digraph: The graph, ready to render.
        """

        nodes = list(decision_tree.walk())
        levels = max(node.depth for node in nodes) - decision_tree.depth
        start, end = np.array(to_rgb(root_colour)), np.array(to_rgb(leaf_colour))

        dot = Digraph(comment="Decision Tree", node_attr={"shape": "box"})
        for node in nodes:
            t = (node.depth - decision_tree.depth) / levels if levels else 1.0
            fill = start + (end - start) * t ** 4
            dot.node(name=str(id(node)), label=str(node), style="filled", fillcolor=to_hex(fill),
                     fontcolor="#000000" if fill.mean() > 0.5 else "#FFFFFF", fontname="Helvetica-Bold",
                     width="2", height="1")
            for child, answer in ((node.left, "T"), (node.right, "F")):
                if child is not None:
                    dot.edge(tail_name=str(id(node)), head_name=str(id(child)), label=answer)
        return dot

    @classmethod
    def display_tree(cls, decision_tree: Node, filename: str = "tree", pop_up: bool = False,
                     output_format: str = "png", **colours) -> None:
        """
        Renders the decision tree to a file.

        Parameters:
            decision_tree (Node): The root node of the decision tree.
            filename (str): The name of the file to be outputted.
            pop_up (bool): Automatically load the result.
            output_format (str): File format of the resulting graph.
            **colours: root_colour and leaf_colour, passed to to_digraph.
        """

        dot = cls.to_digraph(decision_tree, **colours)
        dot.render(filename, view=pop_up, format=output_format, cleanup=True)
        logger.info("rendered tree to %s.%s", filename, output_format)
