"""Command line entry points."""

import argparse
import json
import logging
import sys
from typing import List, Optional

import pandas as pd
import requests
from tqdm import tqdm

from .ingredients import IngredientResolver
from .recipes import FormatError, Recipe, find_recipes, list_ingredients, load_catalog
from .scraping import PoliteSession, scrape_recipe_table
from .scraping.table import DEFAULT_TABLE_SELECTOR

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def format_recipe(recipe: Recipe) -> str:
    """Render a recipe as ``a + b -> output xN``."""
    return f"{' + '.join(recipe.inputs)} -> {recipe.output} x{recipe.qty}"


def _run_batch(catalog, batch_file: str, output_file: str) -> None:
    with open(batch_file, "r", encoding="utf-8") as f:
        queries = [line.strip() for line in f if line.strip()]

    resolver = IngredientResolver(catalog)
    records = []
    for query in tqdm(queries, desc="Queries"):
        response = find_recipes(catalog, query, resolver=resolver)
        records.append(
            {
                "query": query,
                "mapped": "; ".join(response.mapped),
                "unrecognized": "; ".join(response.unrecognized),
                "suggestions": "; ".join(format_recipe(r) for r in response.suggestions),
            }
        )

    df = pd.DataFrame(
        records, columns=["query", "mapped", "unrecognized", "suggestions"]
    )
    df.to_csv(output_file, index=False)
    print(f"Wrote {len(df)} query results to {output_file}")


def suggest_main(argv: Optional[List[str]] = None) -> int:
    """Query a recipe table from the command line."""
    parser = argparse.ArgumentParser(
        description="Find the recipes you can make from a list of ingredients"
    )
    parser.add_argument(
        "--csv",
        type=str,
        default="food.csv",
        help="Path to the recipe table CSV",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "--have",
        type=str,
        help="Ingredients separated by commas, semicolons or newlines",
    )
    mode.add_argument(
        "--list-ingredients",
        action="store_true",
        help="Print every known ingredient name",
    )
    mode.add_argument(
        "--batch",
        type=str,
        help="Text file with one query per line",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="suggestions.csv",
        help="Output CSV for --batch results",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        catalog = load_catalog(args.csv)
    except FormatError as e:
        logger.error(f"load csv {args.csv}: {e}")
        return 1
    if not catalog.recipes:
        logger.error(f"no recipes parsed from {args.csv}")
        return 1

    if args.list_ingredients:
        names = list_ingredients(catalog)
        if args.json:
            print(json.dumps(names, ensure_ascii=False))
        else:
            for name in names:
                print(name)
        return 0

    if args.batch:
        try:
            _run_batch(catalog, args.batch, args.output)
        except OSError as e:
            logger.error(f"batch {args.batch}: {e}")
            return 1
        return 0

    response = find_recipes(catalog, args.have)
    if args.json:
        print(json.dumps(response.to_dict(), ensure_ascii=False, indent=2))
        return 0

    print(f"Matched: {', '.join(response.mapped) or '(none)'}")
    if response.unrecognized:
        print(f"Unrecognized: {', '.join(response.unrecognized)}")
    if not response.suggestions:
        print("No recipes can be made from these ingredients.")
    for recipe in response.suggestions:
        print(f"  - {format_recipe(recipe)}")
    return 0


def scrape_main(argv: Optional[List[str]] = None) -> int:
    """Scrape a recipe table page into a CSV file."""
    parser = argparse.ArgumentParser(
        description="Scrape an HTML recipe table into a recipe CSV"
    )
    parser.add_argument("--url", type=str, required=True, help="Page URL to fetch")
    parser.add_argument("--out", type=str, required=True, help="Output .csv path")
    parser.add_argument(
        "--selector",
        type=str,
        default=DEFAULT_TABLE_SELECTOR,
        help="CSS selector for the target table",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=25.0,
        help="Request timeout in seconds",
    )
    parser.add_argument(
        "--ignore-robots",
        action="store_true",
        help="Fetch even if robots.txt disallows the page",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    session = PoliteSession(
        args.url, timeout=args.timeout, respect_robots=not args.ignore_robots
    )
    try:
        count = scrape_recipe_table(args.url, args.out, args.selector, session=session)
    except (requests.RequestException, RuntimeError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"OK: {count} rows -> {args.out}")
    return 0
