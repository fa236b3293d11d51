"""Recipe catalog loading and indexing."""

import dataclasses
import logging
import os
import re
import warnings
from types import MappingProxyType
from typing import IO, Dict, Iterable, List, Mapping, Tuple, Union

import pandas as pd
from pandas.errors import ParserWarning

from ..ingredients.normalization import normalize_key
from .models import Recipe

logger = logging.getLogger(__name__)

QTY_RE = re.compile(r"[+-]?[0-9]+")

INPUT_COLUMNS = ("input1_name", "input2_name", "input3_name")
OUTPUT_NAME_COLUMN = "output_name"
OUTPUT_QTY_COLUMN = "output_qty"
REQUIRED_COLUMNS = INPUT_COLUMNS + (OUTPUT_NAME_COLUMN, OUTPUT_QTY_COLUMN)

CatalogSource = Union[str, os.PathLike, IO[str]]


class FormatError(ValueError):
    """Raised when a recipe table cannot be turned into a catalog."""


@dataclasses.dataclass(frozen=True)
class Catalog:
    """Read-only collection of recipes with ingredient lookups.

    Attributes:
        recipes: Recipes in load order; the position is the recipe ID.
        all_ingredients: Sorted distinct input ingredient names.
        ingredient_index: Ingredient name -> IDs of recipes that use it.
        normalized_lookup: Normalized key -> canonical ingredient name.
    """

    recipes: Tuple[Recipe, ...]
    all_ingredients: Tuple[str, ...]
    ingredient_index: Mapping[str, Tuple[int, ...]]
    normalized_lookup: Mapping[str, str]

    @classmethod
    def from_recipes(cls, recipes: Iterable[Recipe]) -> "Catalog":
        """Build a catalog and its derived lookups from recipe values.

        When two ingredient names share a normalized key the one seen last
        (in recipe order, then input order) is kept.
        """
        recipes = tuple(recipes)
        index: Dict[str, List[int]] = {}
        lookup: Dict[str, str] = {}

        for recipe_id, recipe in enumerate(recipes):
            for name in recipe.inputs:
                index.setdefault(name, []).append(recipe_id)
                key = normalize_key(name)
                previous = lookup.get(key)
                if previous is not None and previous != name:
                    logger.debug(
                        f"Normalized key '{key}' shared by '{previous}' and '{name}'; "
                        f"keeping '{name}'"
                    )
                lookup[key] = name

        return cls(
            recipes=recipes,
            all_ingredients=tuple(sorted(index)),
            ingredient_index=MappingProxyType(
                {name: tuple(ids) for name, ids in index.items()}
            ),
            normalized_lookup=MappingProxyType(lookup),
        )


def _parse_qty(value: str) -> int:
    value = value.strip()
    # plain ASCII digits only; int() would also take "1_000" and other scripts
    if not QTY_RE.fullmatch(value):
        return 1
    qty = int(value)
    return qty if qty > 0 else 1


def _read_table(source: CatalogSource) -> pd.DataFrame:
    try:
        with warnings.catch_warnings():
            # rows wider than the header only warn with index_col=False
            warnings.simplefilter("error", ParserWarning)
            return pd.read_csv(
                source,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
                index_col=False,
            )
    except (OSError, ValueError, ParserWarning) as e:
        # pandas parser and empty-data errors are ValueError subclasses
        raise FormatError(f"read csv: {e}") from e


def load_catalog(source: CatalogSource) -> Catalog:
    """Load a recipe table into a catalog.

    The table needs the columns input1_name, input2_name, input3_name,
    output_name and output_qty (matched case-insensitively). Other
    columns are ignored. Rows without an output name or without any
    input are skipped, and an unreadable or non-positive quantity
    becomes 1.

    Args:
        source: Path to a CSV file, or an open text stream.

    Returns:
        The loaded Catalog.

    Raises:
        FormatError: If the source cannot be read, a required column is
            missing, or there are no data rows.
    """
    df = _read_table(source)

    columns = {str(c).strip().lower(): c for c in df.columns}
    for name in REQUIRED_COLUMNS:
        if name not in columns:
            raise FormatError(f"missing required column: {name}")
    if df.empty:
        raise FormatError("csv has no data rows")

    table = df[[columns[name] for name in REQUIRED_COLUMNS]].fillna("")
    table.columns = list(REQUIRED_COLUMNS)

    recipes: List[Recipe] = []
    skipped = 0
    for row_number, row in table.iterrows():
        inputs = tuple(
            row[name].strip() for name in INPUT_COLUMNS if row[name].strip()
        )
        output = row[OUTPUT_NAME_COLUMN].strip()
        if not output or not inputs:
            skipped += 1
            logger.debug(f"Skipping data row {row_number + 1}: missing output or inputs")
            continue
        recipes.append(
            Recipe(inputs=inputs, output=output, qty=_parse_qty(row[OUTPUT_QTY_COLUMN]))
        )

    catalog = Catalog.from_recipes(recipes)
    logger.info(
        f"Loaded {len(catalog.recipes)} recipes with "
        f"{len(catalog.all_ingredients)} ingredients ({skipped} rows skipped)"
    )
    return catalog
