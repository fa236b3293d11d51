"""Scrape an HTML recipe table into the CSV layout read by load_catalog."""

import dataclasses
import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import pandas as pd
from bs4 import BeautifulSoup

from .polite import PoliteSession

logger = logging.getLogger(__name__)

DEFAULT_TABLE_SELECTOR = "#table"

AMOUNT_RE = re.compile(r"\bx\s*(\d+)\b", re.IGNORECASE)
BACKGROUND_RE = re.compile(r"background:\s*([^;]+)", re.IGNORECASE)

CELL_FIELDS = ("name", "qty", "href", "img", "bg")
ROW_CELLS = ("input1", "input2", "input3", "output")
TABLE_COLUMNS = [f"{cell}_{field}" for cell in ROW_CELLS for field in CELL_FIELDS]


@dataclasses.dataclass
class RecipeCell:
    """One item slot of a scraped recipe row."""

    name: str = ""
    qty: Optional[int] = None
    href: str = ""
    img: str = ""
    bg: str = ""


@dataclasses.dataclass
class RecipeRow:
    input1: RecipeCell
    input2: RecipeCell
    input3: RecipeCell
    output: RecipeCell

    def to_record(self) -> Dict[str, Any]:
        record = {}
        for cell_name in ROW_CELLS:
            cell = getattr(self, cell_name)
            for field in CELL_FIELDS:
                value = getattr(cell, field)
                record[f"{cell_name}_{field}"] = "" if value is None else str(value)
        return record


def _condense(text: str) -> str:
    return " ".join(text.split())


def _first_text(tag, selector: str) -> str:
    found = tag.select_one(selector)
    return _condense(found.get_text()) if found else ""


def parse_amount(text: str) -> Optional[int]:
    """Pull an ``xN`` amount out of cell text.

    Examples:
        >>> parse_amount("Salt x2")
        2
        >>> parse_amount("Salt")
        None
    """
    match = AMOUNT_RE.search(text or "")
    return int(match.group(1)) if match else None


def extract_cell(td, base_url: str) -> RecipeCell:
    """Extract the item name, amount, link, image and background of a cell.

    The name comes from a hidden ``span.sort`` when present, then from the
    visible ``.cell-text`` with any ``xN`` amount removed, then from the
    image alt text. A named cell without an explicit amount gets 1.
    """
    if td is None:
        return RecipeCell()

    name = _first_text(td, "span.sort")
    visible = _first_text(td, ".cell-text")
    if not name and visible:
        name = AMOUNT_RE.sub("", visible).strip() or visible
    img = td.find("img")
    if not name and img is not None and img.get("alt"):
        name = img["alt"].strip()

    qty = parse_amount(_first_text(td, "span.amount"))
    if qty is None:
        qty = parse_amount(visible)
    if qty is None and name:
        qty = 1

    link = td.find("a")
    href = urljoin(base_url, link["href"]) if link is not None and link.get("href") else ""
    img_url = urljoin(base_url, img["src"]) if img is not None and img.get("src") else ""

    bg = ""
    content = td.select_one("div.cell-content")
    if content is not None and content.get("style"):
        match = BACKGROUND_RE.search(content["style"])
        if match:
            bg = match.group(1).strip()

    return RecipeCell(name=name, qty=qty, href=href, img=img_url, bg=bg)


def parse_recipe_table(
    html: str, base_url: str, selector: str = DEFAULT_TABLE_SELECTOR
) -> List[RecipeRow]:
    """Parse recipe rows out of the first table matching ``selector``.

    The first three cells of each body row are the inputs and the fourth is
    the output. Missing cells come back empty.

    Args:
        html: Page HTML.
        base_url: URL the page was fetched from, for resolving links.
        selector: CSS selector of the table.

    Returns:
        The parsed rows, in page order.

    Raises:
        ValueError: If nothing matches the selector.
    """
    soup = BeautifulSoup(html, "lxml")
    table = soup.select_one(selector)
    if table is None:
        raise ValueError(f"table not found with selector {selector!r}")

    trs = table.select("tbody > tr")
    if not trs:
        # lxml does not add an implied tbody
        trs = table.find_all("tr")
    trs = [tr for tr in trs if tr.find("td") is not None]

    rows = []
    for tr in trs:
        tds = tr.find_all("td")
        cells = [
            extract_cell(tds[i] if i < len(tds) else None, base_url)
            for i in range(len(ROW_CELLS))
        ]
        rows.append(RecipeRow(*cells))
    return rows


def _check_output_path(path: str) -> None:
    if not str(path).lower().endswith(".csv"):
        raise ValueError(f"output path must end with .csv: {path}")


def write_recipe_table(rows: List[RecipeRow], path: str) -> None:
    """Write scraped rows as CSV with name, qty, href, img and bg per cell."""
    _check_output_path(path)
    df = pd.DataFrame([row.to_record() for row in rows], columns=TABLE_COLUMNS)
    df.to_csv(path, index=False)


def scrape_recipe_table(
    url: str,
    out: str,
    selector: str = DEFAULT_TABLE_SELECTOR,
    session: Optional[PoliteSession] = None,
) -> int:
    """Fetch a page, parse its recipe table and write it to ``out``.

    Args:
        url: Page URL.
        out: Destination CSV path.
        selector: CSS selector of the table.
        session: Session to fetch with. Defaults to a PoliteSession for ``url``.

    Returns:
        Number of rows written.

    Raises:
        ValueError: If ``out`` is not a .csv path, the table is missing, or
            it has no rows.
    """
    _check_output_path(out)
    if session is None:
        session = PoliteSession(url)

    response = session.get(url)
    rows = parse_recipe_table(response.text, response.url or url, selector)
    if not rows:
        raise ValueError("parsed 0 rows; check selector or that the page is server-rendered")

    write_recipe_table(rows, out)
    logger.info(f"Wrote {len(rows)} rows from {url} to {out}")
    return len(rows)
