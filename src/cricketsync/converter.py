"""
CSV to JSON conversion for sheet exports.

Parsing is best-effort: anomalies such as short or long rows and duplicate
headers are collected as ``ParseWarning`` values and the partial result is
still used. Only writing the output can fail.

The C engine checks the document first; the python engine then reads the
cells so short rows stay visible as padding.
"""

from __future__ import annotations

import io
import json
import logging
import math
import re
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from .errors import WriteError

logger = logging.getLogger(__name__)

CellValue = Union[int, float, bool, str]
Record = Dict[str, CellValue]

# Optional sign, digits with an optional decimal point, optional exponent
NUMERIC_PATTERN = re.compile(
    r"^\s*[-+]?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$", re.ASCII
)

# Largest integer a JavaScript consumer can represent exactly
MAX_SAFE_INTEGER = 2**53 - 1

# Matched against the untrimmed cell
BOOLEAN_VALUES = {
    "true": True,
    "TRUE": True,
    "false": False,
    "FALSE": False,
}

# C tokenizer report for a long row under on_bad_lines="warn"
SKIPPED_LINE_PATTERN = re.compile(
    r"Skipping line (\d+): expected (\d+) fields, saw (\d+)"
)


@dataclass(frozen=True)
class ParseWarning:
    """
    Non-fatal parsing anomaly.

    ``code`` is one of ``DuplicateHeader``, ``TooFewFields``,
    ``TooManyFields`` or ``MalformedCsv``; ``row`` is the 1-based data row
    when it is known.
    """

    code: str
    message: str
    row: Optional[int] = None

    def __str__(self) -> str:
        if self.row is None:
            return f"{self.code}: {self.message}"
        return f"Row {self.row}: {self.code}: {self.message}"


@dataclass
class ConversionResult:
    """Records parsed from one CSV document plus the warnings raised."""

    records: List[Record] = field(default_factory=list)
    warnings: List[ParseWarning] = field(default_factory=list)
    fields: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


def coerce_cell(raw: str) -> CellValue:
    """
    Turn a numeric-looking or boolean cell into a number or bool.

    Integral numbers become ``int`` unless they exceed ``MAX_SAFE_INTEGER``,
    in which case the raw text is kept. Anything else is returned as is.
    """
    if NUMERIC_PATTERN.match(raw):
        number = float(raw)
        if not math.isfinite(number):
            return raw
        if number.is_integer():
            if abs(number) > MAX_SAFE_INTEGER:
                return raw
            return int(number)
        return number
    return BOOLEAN_VALUES.get(raw, raw)


def clean_value(value: CellValue) -> CellValue:
    """Trim strings; numbers and booleans pass through."""
    if isinstance(value, str):
        return value.strip()
    return value


def clean_record(record: Record) -> Record:
    return {key: clean_value(value) for key, value in record.items()}


def unique_headers(cells: Sequence[object]) -> Tuple[List[str], List[ParseWarning]]:
    """
    Trim header cells and suffix repeated names (``Name``, ``Name_1``, ...).

    Returns:
        The field names and one ``DuplicateHeader`` warning per rename
    """
    headers: List[str] = []
    issues: List[ParseWarning] = []
    taken = set()
    for position, cell in enumerate(cells, start=1):
        name = cell.strip() if isinstance(cell, str) else ""
        unique = name
        suffix = 0
        while unique in taken:
            suffix += 1
            unique = f"{name}_{suffix}"
        if unique != name:
            issues.append(
                ParseWarning(
                    "DuplicateHeader",
                    f"Column {position} repeats header '{name}', renamed to '{unique}'",
                )
            )
        taken.add(unique)
        headers.append(unique)
    return headers, issues


def normalize_newlines(text: str) -> str:
    """Turn ``\\r\\n`` and bare ``\\r`` line endings into ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _check_document(text: str) -> Tuple[Optional[str], List[Tuple[int, int, int]]]:
    """
    Run the C tokenizer over ``text`` to catch what the python engine hides.

    The python engine stops quietly at an unterminated quote; the C engine
    raises instead. Its bad-line warnings also carry file line numbers.

    Returns:
        (error, skipped) where ``error`` is the tokenizer error message or
        None, and ``skipped`` lists ``(line, expected, saw)`` for long rows
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", pd.errors.ParserWarning)
        try:
            pd.read_csv(
                io.StringIO(text),
                header=None,
                dtype=object,
                na_filter=False,
                skip_blank_lines=True,
                engine="c",
                on_bad_lines="warn",
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            return str(e), []

    skipped = []
    for warning in caught:
        if not issubclass(warning.category, pd.errors.ParserWarning):
            continue
        for match in SKIPPED_LINE_PATTERN.finditer(str(warning.message)):
            skipped.append(tuple(int(group) for group in match.groups()))
    return None, skipped


def _read_rows(text: str) -> Tuple[List[list], List[list]]:
    """
    Tokenize ``text`` into rows of raw strings.

    Returns:
        (rows, overflow) where ``overflow`` holds the rows that had more
        cells than the first row; pandas keeps them truncated in ``rows``.
    """
    overflow: List[list] = []

    def keep_overflow(bad_line: list) -> list:
        overflow.append(bad_line)
        return bad_line

    with warnings.catch_warnings():
        # Truncation of long rows is reported through ``overflow`` instead
        warnings.simplefilter("ignore", pd.errors.ParserWarning)
        frame = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=object,
            na_filter=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=keep_overflow,
        )
    rows = [list(row) for row in frame.itertuples(index=False, name=None)]
    return rows, overflow


def parse_csv(text: str) -> ConversionResult:
    """
    Parse CSV text into records keyed by the trimmed header row.

    Args:
        text: CSV document, first row holding the field names

    Returns:
        ConversionResult with the cleaned records and any parse warnings
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    if not text.strip():
        return ConversionResult()
    text = normalize_newlines(text)

    issues: List[ParseWarning] = []
    error, skipped = _check_document(text)
    if error is not None:
        issues.append(
            ParseWarning("MalformedCsv", f"{error}; rows after the error may be missing")
        )

    # Keep whatever the python engine recovers before the damage
    try:
        rows, overflow = _read_rows(text)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        if error is None:
            issues.append(ParseWarning("MalformedCsv", str(e)))
        return ConversionResult(warnings=issues)

    if not rows:
        return ConversionResult(warnings=issues)

    headers, header_issues = unique_headers(rows[0])
    issues.extend(header_issues)
    width = len(headers)

    if len(skipped) == len(overflow):
        for line_number, _, saw in skipped:
            issues.append(
                ParseWarning(
                    "TooManyFields",
                    f"Line {line_number}: expected {width} fields but parsed {saw}; "
                    "extra values dropped",
                )
            )
    else:
        # C and python engines disagree after a short row; fall back to counts
        for line in overflow:
            issues.append(
                ParseWarning(
                    "TooManyFields",
                    f"Expected {width} fields but parsed {len(line)}; "
                    "extra values dropped",
                )
            )

    records: List[Record] = []
    for number, row in enumerate(rows[1:], start=1):
        cells = list(row[:width])
        present = [cell for cell in cells if isinstance(cell, str)]
        if not any(cell.strip() for cell in present):
            continue
        if len(present) < width:
            issues.append(
                ParseWarning(
                    "TooFewFields",
                    f"Expected {width} fields but parsed {len(present)}",
                    row=number,
                )
            )
        record = {
            header: coerce_cell(cell if isinstance(cell, str) else "")
            for header, cell in zip(headers, cells)
        }
        records.append(clean_record(record))

    return ConversionResult(records=records, warnings=issues, fields=headers)


def write_records(records: List[Record], path: Path) -> int:
    """
    Write records as an indented JSON array, replacing ``path``.

    The document is serialized before the file is opened, so a
    serialization failure leaves any previous file untouched.

    Returns:
        Number of records written

    Raises:
        WriteError: If serialization, directory creation or the write fails
    """
    path = Path(path)
    try:
        payload = json.dumps(records, indent=2, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise WriteError(f"Cannot serialize records for {path}: {e}", path=path) from e

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
    except OSError as e:
        raise WriteError(f"Cannot write {path}: {e}", path=path) from e

    logger.info("Saved %d records to %s", len(records), path)
    return len(records)


def convert(text: str, path: Path) -> ConversionResult:
    """
    Parse ``text`` and write the records to ``path``.

    Parse warnings are logged and returned with the result.

    Raises:
        WriteError: If the output cannot be written
    """
    result = parse_csv(text)
    for issue in result.warnings:
        logger.warning("Parsing warning for %s: %s", path, issue)
    write_records(result.records, path)
    return result
