import dataclasses

import pytest

from node import Node
from sample import Feature, FlowerClass, Sample
from conftest import make_sample


def hand_built_tree():
    """PL < 2.5 -> setosa, else PW < 1.7 -> versicolor, else virginica."""
    root = Node([], "")
    root.feature, root.threshold = Feature.PL, 2.5
    root.left = Node([], "L")
    root.left.leaf_val = FlowerClass.SETOSA
    root.right = Node([], "R")
    root.right.feature, root.right.threshold = Feature.PW, 1.7
    root.right.left = Node([], "RL")
    root.right.left.leaf_val = FlowerClass.VERSICOLOR
    root.right.right = Node([], "RR")
    root.right.right.leaf_val = FlowerClass.VIRGINICA
    return root


def test_sample_feature():
    sample = make_sample(5.1, 3.5, 1.4, 0.2, 0)
    assert sample.feature(Feature.SL) == 5.1
    assert sample.feature(Feature.SW) == 3.5
    assert sample.feature(Feature.PL) == 1.4
    assert sample.feature(Feature.PW) == 0.2
    assert sample.class_label == FlowerClass.SETOSA


def test_sample_rejects_unknown_feature():
    with pytest.raises(ValueError):
        make_sample(5.1, 3.5, 1.4, 0.2, 0).feature(4)


def test_sample_rejects_wrong_arity():
    with pytest.raises(ValueError):
        Sample((1.0, 2.0, 3.0), FlowerClass.SETOSA)


def test_sample_rejects_unknown_class():
    with pytest.raises(ValueError):
        Sample((1.0, 2.0, 3.0, 4.0), 3)


def test_sample_is_immutable():
    sample = make_sample(5.1, 3.5, 1.4, 0.2, 0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        sample.class_label = FlowerClass.VIRGINICA


def test_sample_str():
    assert str(make_sample(6.3, 2.5, 5.0, 1.9, 2)) == "6.3,2.5,5.0,1.9,2.0"


def test_classify_threshold_goes_right():
    root = hand_built_tree()
    assert root.classify(make_sample(5.0, 3.0, 1.4, 0.2, 0)) == FlowerClass.SETOSA
    assert root.classify(make_sample(5.0, 3.0, 2.5, 0.2, 0)) == FlowerClass.VERSICOLOR
    assert root.classify(make_sample(5.0, 3.0, 4.5, 1.7, 0)) == FlowerClass.VIRGINICA
    assert root.classify(make_sample(5.0, 3.0, 4.5, 1.69, 0)) == FlowerClass.VERSICOLOR


def test_walk_is_preorder_left_first():
    assert [node.position for node in hand_built_tree().walk()] == ["", "L", "R", "RL", "RR"]


def test_node_states():
    node = Node([make_sample(1.0, 1.0, 1.0, 1.0, 1)], "LL")
    assert node.is_open() and not node.is_leaf()
    assert node.depth == 2
    node.leaf_val = FlowerClass.VERSICOLOR
    assert node.is_leaf() and not node.is_open()


def test_class_counts():
    node = Node([make_sample(1.0, 1.0, 1.0, 1.0, code) for code in (0, 2, 2, 1, 2)])
    assert node.class_counts() == [1, 1, 3]


def test_str():
    root = hand_built_tree()
    root.information_gain = 0.9183
    assert str(root).splitlines() == ["PL < 2.50", "gain = 0.918", "position = Root", "samples = 0"]
    assert str(root.right.left).splitlines() == ["position = RL", "samples = 0", "class = versicolor"]
