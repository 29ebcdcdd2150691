from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


class Feature(IntEnum):
    SL = 0  # sepal length
    SW = 1  # sepal width
    PL = 2  # petal length
    PW = 3  # petal width


class FlowerClass(IntEnum):
    SETOSA = 0
    VERSICOLOR = 1
    VIRGINICA = 2


@dataclass(frozen=True)
class Sample:
    """
    One labeled flower measurement.

    Attributes:
        features (Tuple[float, float, float, float]): Values ordered as the members of Feature.
        class_label (FlowerClass): The flower's class.
    """

    features: Tuple[float, float, float, float]
    class_label: FlowerClass

    def __post_init__(self):
        if len(self.features) != len(Feature):
            raise ValueError(f"expected {len(Feature)} feature values, got {len(self.features)}")
        object.__setattr__(self, "features", tuple(float(value) for value in self.features))
        object.__setattr__(self, "class_label", FlowerClass(self.class_label))

    def feature(self, feature: Feature) -> float:
        """
        Returns the value of one feature.

        Parameters:
            feature (Feature): The feature identifier.

        Returns:
            float: The feature's value for this sample.
        """

        return self.features[Feature(feature)]

    def __str__(self) -> str:
        values = ",".join(f"{value:.1f}" for value in self.features)
        return f"{values},{float(self.class_label):.1f}"
