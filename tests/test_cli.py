import json

import pandas as pd
import pytest
from recipe_finder import cli


def test_suggest_prints_recipes(recipe_csv, capsys):
    assert cli.suggest_main(["--csv", str(recipe_csv), "--have", "salt, water, phlogiston"]) == 0
    out = capsys.readouterr().out
    assert "Matched: Salt, Water" in out
    assert "Unrecognized: phlogiston" in out
    assert "Salt + Water -> Brine x2" in out
    assert "Salt + Salt -> Rock Salt x3" in out


def test_suggest_reports_no_recipes(recipe_csv, capsys):
    assert cli.suggest_main(["--csv", str(recipe_csv), "--have", "water"]) == 0
    assert "No recipes can be made" in capsys.readouterr().out


def test_suggest_json(recipe_csv, capsys):
    assert cli.suggest_main(["--csv", str(recipe_csv), "--have", "carbon", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == {
        "mapped": ["Carbon"],
        "unrecognized": [],
        "suggestions": [{"inputs": ["Carbon"], "output": "Condensed Carbon", "qty": 1}],
    }


def test_list_ingredients_json(recipe_csv, capsys):
    assert cli.suggest_main(["--csv", str(recipe_csv), "--list-ingredients", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == [
        "Carbon",
        "Ferrite Dust",
        "Oxygen",
        "Salt",
        "Water",
    ]


def test_batch_writes_csv(recipe_csv, tmp_path, capsys):
    queries = tmp_path / "queries.txt"
    queries.write_text("salt, water\n\ncarbon; gold\n", encoding="utf-8")
    output = tmp_path / "results.csv"

    assert (
        cli.suggest_main(
            ["--csv", str(recipe_csv), "--batch", str(queries), "--output", str(output)]
        )
        == 0
    )

    df = pd.read_csv(output, dtype=str, keep_default_na=False)
    assert list(df.columns) == ["query", "mapped", "unrecognized", "suggestions"]
    assert df["query"].tolist() == ["salt, water", "carbon; gold"]
    assert df["mapped"].tolist() == ["Salt; Water", "Carbon"]
    assert df["unrecognized"].tolist() == ["", "gold"]
    assert df["suggestions"].tolist()[1] == "Carbon -> Condensed Carbon x1"
    assert "Wrote 2 query results" in capsys.readouterr().out


def test_missing_batch_file_fails(recipe_csv, tmp_path):
    output = tmp_path / "results.csv"
    code = cli.suggest_main(
        [
            "--csv",
            str(recipe_csv),
            "--batch",
            str(tmp_path / "missing.txt"),
            "--output",
            str(output),
        ]
    )
    assert code == 1
    assert not output.exists()


def test_missing_csv_fails(tmp_path):
    assert cli.suggest_main(["--csv", str(tmp_path / "missing.csv"), "--have", "salt"]) == 1


def test_catalog_without_recipes_fails(tmp_path):
    path = tmp_path / "food.csv"
    path.write_text(
        "input1_name,input2_name,input3_name,output_name,output_qty\nSalt,,,,1\n",
        encoding="utf-8",
    )
    assert cli.suggest_main(["--csv", str(path), "--have", "salt"]) == 1


def test_suggest_requires_a_mode(recipe_csv):
    with pytest.raises(SystemExit) as excinfo:
        cli.suggest_main(["--csv", str(recipe_csv)])
    assert excinfo.value.code == 2


def test_scrape_main(mocker, tmp_path, capsys):
    scrape = mocker.patch("recipe_finder.cli.scrape_recipe_table", return_value=3)
    out = str(tmp_path / "cooking.csv")

    assert cli.scrape_main(["--url", "https://example.com/cooking", "--out", out]) == 0

    args, kwargs = scrape.call_args
    assert args == ("https://example.com/cooking", out, "#table")
    assert kwargs["session"].respect_robots is True
    assert f"OK: 3 rows -> {out}" in capsys.readouterr().out


def test_scrape_main_reports_errors(mocker, capsys):
    mocker.patch(
        "recipe_finder.cli.scrape_recipe_table",
        side_effect=ValueError("parsed 0 rows"),
    )
    code = cli.scrape_main(
        ["--url", "https://example.com", "--out", "out.csv", "--ignore-robots"]
    )
    assert code == 1
    assert "ERROR: parsed 0 rows" in capsys.readouterr().err
