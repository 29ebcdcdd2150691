from typing import Iterator, List, Optional

from sample import Feature, FlowerClass, Sample


class Node:
    def __init__(self, samples: List[Sample], position: str = ""):
        self.samples = list(samples)
        self.position = position
        self.feature: Optional[Feature] = None
        self.threshold: Optional[float] = None
        self.information_gain = None
        self.leaf_val: Optional[FlowerClass] = None
        self.left: Optional["Node"] = None
        self.right: Optional["Node"] = None

    @property
    def depth(self) -> int:
        return len(self.position)

    def is_leaf(self) -> bool:
        return self.leaf_val is not None

    def is_open(self) -> bool:
        return self.leaf_val is None and self.feature is None

    def class_counts(self) -> List[int]:
        counts = [0] * len(FlowerClass)
        for sample in self.samples:
            counts[sample.class_label] += 1
        return counts

    def classify(self, sample: Sample) -> FlowerClass:
        """
        Walks the tree from this node to a leaf and returns the leaf's class.

        Parameters:
            sample (Sample): The sample to classify.

        Returns:
            FlowerClass: The predicted class.
        """

        node = self
        while not node.is_leaf():
            if sample.feature(node.feature) < node.threshold:
                node = node.left
            else:
                node = node.right
        return node.leaf_val

    def walk(self) -> Iterator["Node"]:
        """Yields this node and every descendant, left subtree before right."""

        yield self
        if self.left is not None:
            yield from self.left.walk()
        if self.right is not None:
            yield from self.right.walk()

    def __str__(self) -> str:
        lines = []
        # branch nodes
        if self.feature is not None:
            lines.append(f"{self.feature.name} < {self.threshold:.2f}")
            lines.append(f"gain = {self.information_gain:.3f}")

        # all nodes
        lines.append(f"position = {self.position or 'Root'}")
        lines.append(f"samples = {len(self.samples)}")

        # leaf nodes
        if self.is_leaf():
            lines.append(f"class = {self.leaf_val.name.lower()}")
        return "\n".join(lines)
