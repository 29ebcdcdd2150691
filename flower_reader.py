import logging
import numpy as np
import pandas as pd
from typing import List, TextIO, Union

from sample import Feature, FlowerClass, Sample

logger = logging.getLogger(__name__)

COLUMNS = [feature.name for feature in Feature] + ["class"]


class MalformedRecord(ValueError):
    """Raised when an input line is not four numbers followed by a class code."""


def parse_line(line: str) -> Sample:
    """
    Parses one `float,float,float,float,int` record.

    Parameters:
        line (str): The record, with or without a trailing newline.

    Returns:
        Sample: The parsed sample.
    """

    fields = [field.strip() for field in line.strip().split(",")]
    if len(fields) != len(COLUMNS):
        raise MalformedRecord(f"expected {len(COLUMNS)} comma-separated fields, got {len(fields)}: {line!r}")
    try:
        values = [float(field) for field in fields[:-1]]
        code = int(fields[-1])
    except ValueError as error:
        raise MalformedRecord(f"non-numeric field in {line!r}") from error

    if not np.all(np.isfinite(values)):
        raise MalformedRecord(f"feature values must be finite: {line!r}")
    if code not in [target.value for target in FlowerClass]:
        raise MalformedRecord(f"class code must be 0, 1 or 2: {line!r}")
    return Sample(tuple(values), FlowerClass(code))


def read_samples(source: Union[str, TextIO]) -> List[Sample]:
    """
    Reads every record of a line-oriented flower file, keeping their order.

    Parameters:
        source (Union[str, TextIO]): A path or an open text buffer.

    Returns:
        List[Sample]: One sample per non-blank line.
    """

    try:
        frame = pd.read_csv(source, header=None, dtype=str, keep_default_na=False,
                            skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        logger.info("read 0 samples")
        return []
    except pd.errors.ParserError as error:
        raise MalformedRecord(str(error)) from error

    if len(frame.columns) != len(COLUMNS):
        raise MalformedRecord(f"expected {len(COLUMNS)} comma-separated fields, got {len(frame.columns)}")

    samples = []
    for row in frame.itertuples(index=False):
        if any(pd.isna(field) for field in row):
            raise MalformedRecord(f"expected {len(COLUMNS)} comma-separated fields: {row}")
        samples.append(parse_line(",".join(row)))

    logger.info("read %d samples", len(samples))
    return samples


def samples_to_frame(samples: List[Sample]) -> pd.DataFrame:
    """
    Lays samples out as a DataFrame with one column per feature plus a class column.

    Parameters:
        samples (List[Sample]): The samples.

    Returns:
        pd.DataFrame: Feature columns as floats, class column as int.
    """

    frame = pd.DataFrame([sample.features for sample in samples], columns=COLUMNS[:-1], dtype=float)
    frame["class"] = pd.Series([int(sample.class_label) for sample in samples], dtype=int)
    return frame
