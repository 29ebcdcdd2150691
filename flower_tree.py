import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO

from decision_tree import DecisionTree
from decision_tree_evaluator import DecisionTreeEvaluator
from flower_reader import read_samples

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    begin: int
    end: int
    max_depth: int
    position: str = ""
    data: Optional[str] = None
    render: Optional[str] = None
    plot_depths: Optional[str] = None
    log_level: str = "WARNING"


def parse_args(argv: Optional[List[str]] = None) -> RunConfig:
    ap = argparse.ArgumentParser(description="Train an information-gain decision tree on flower measurements.")
    ap.add_argument("begin", type=int, help="index of the first validation sample")
    ap.add_argument("end", type=int, help="one past the index of the last validation sample")
    ap.add_argument("max_depth", type=int, help="maximum depth of the tree")
    ap.add_argument("position", nargs="?", default="", help="position label of the root; extends the depth budget")
    ap.add_argument("--data", default=None, help="path to the sample file (default: stdin)")
    ap.add_argument("--render", default=None, metavar="FILE", help="render the tree with graphviz to FILE.png")
    ap.add_argument("--plot-depths", default=None, metavar="FILE",
                    help="save a plot of accuracy for every depth up to max_depth")
    ap.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args(argv)
    return RunConfig(**vars(args))


def run(config: RunConfig, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
        tree_model: Optional[DecisionTree] = None) -> dict:
    """
    Reads the samples, trains on everything outside the validation slice and writes the report.

    Returns:
        dict: The evaluation info from DecisionTreeEvaluator.evaluate.
    """

    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    tree_model = tree_model if tree_model is not None else DecisionTree()
    samples = read_samples(config.data if config.data is not None else stdin)
    info = DecisionTreeEvaluator.evaluate(tree_model, samples, config.begin, config.end, config.max_depth,
                                          config.position)

    print(f"Validation Set:\tFlowers {config.begin} to {config.end - 1}", file=stdout)
    print(f"Maximum Depth:\t{config.max_depth}", file=stdout)
    print(DecisionTree.dump_tree(info["tree"]), file=stdout)
    print(f"\nTrain Accuracy:\t{info['train'][0]}/{info['train'][1]}", file=stdout)
    print(f"Test Accuracy:\t{info['validation'][0]}/{info['validation'][1]}", file=stdout)

    if config.render is not None:
        DecisionTree.display_tree(info["tree"], filename=config.render)
    if config.plot_depths is not None:
        curve = DecisionTreeEvaluator.depth_curve(tree_model, samples, config.begin, config.end, config.max_depth,
                                                  config.position)
        DecisionTreeEvaluator.display_depth_curve(curve, filename=config.plot_depths)
    return info


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_args(argv)
    logging.basicConfig(level=getattr(logging, config.log_level),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    try:
        run(config)
    except (ValueError, OSError) as error:
        logger.error("%s", error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
