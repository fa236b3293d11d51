import pytest

from recipe_finder.recipes import Catalog, Recipe

RECIPE_CSV = """input1_name,input2_name,input3_name,output_name,output_qty
Salt,Water,,Brine,2
Salt,Carbon,,Salty Carbon,1
Carbon,,,Condensed Carbon,1
Ferrite Dust,Carbon,Oxygen,Metal Plating,1
Salt,Salt,,Rock Salt,3
"""


@pytest.fixture
def recipes():
    return [
        Recipe(("Salt", "Water"), "Brine", 2),
        Recipe(("Salt", "Carbon"), "Salty Carbon", 1),
        Recipe(("Carbon",), "Condensed Carbon", 1),
        Recipe(("Ferrite Dust", "Carbon", "Oxygen"), "Metal Plating", 1),
        Recipe(("Salt", "Salt"), "Rock Salt", 3),
    ]


@pytest.fixture
def catalog(recipes):
    return Catalog.from_recipes(recipes)


@pytest.fixture
def recipe_csv(tmp_path):
    path = tmp_path / "food.csv"
    path.write_text(RECIPE_CSV, encoding="utf-8")
    return path
