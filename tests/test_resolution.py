import pytest
from recipe_finder.ingredients.normalization import normalize_key
from recipe_finder.ingredients.resolution import IngredientResolver, resolve_ingredients
from recipe_finder.recipes import Catalog, Recipe


@pytest.fixture
def resolver(catalog):
    return IngredientResolver(catalog)


def test_resolve_exact_terms():
    catalog = Catalog.from_recipes([Recipe(("Salt", "Water"), "Brine", 2)])
    result = resolve_ingredients(catalog, ["salt", "water"])
    assert result.mapped == ["Salt", "Water"]
    assert result.unknown == []


def test_resolve_empty_input(catalog):
    result = resolve_ingredients(catalog, [])
    assert result.mapped == []
    assert result.unknown == []


@pytest.mark.parametrize(
    "term, expected_ingredient, expected_score",
    [
        ("saltt", "Salt", 0.5),
        ("Carbn", "Carbon", 1.0),
        ("ferite dust", "Ferrite Dust", 1.0),
        ("oxygenated", "Oxygen", 2.0),
        ("watr", "Water", 1.0),
    ],
)
def test_fuzzy_match(resolver, term, expected_ingredient, expected_score):
    match = resolver.match(term)
    assert match is not None
    assert match.source == "fuzzy"
    assert match.ingredient == expected_ingredient
    assert match.score == expected_score


def test_score_at_threshold_is_accepted(resolver):
    # "water" is inside "salt water" at distance 5, halved to exactly 2.5,
    # beating "salt" at distance 6 halved to 3.0
    match = resolver.match("salt water")
    assert match.ingredient == "Water"
    assert match.score == 2.5


def test_unrelated_term_is_unknown(resolver):
    result = resolver.resolve(["xyz123unrelated"])
    assert result.mapped == []
    assert result.unknown == ["xyz123unrelated"]


def test_unknown_terms_keep_original_text_and_order(resolver):
    result = resolver.resolve(["  Unobtainium!! ", "salt", "Phlogiston"])
    assert result.mapped == ["Salt"]
    assert result.unknown == ["  Unobtainium!! ", "Phlogiston"]


def test_exact_match_reports_zero_score(resolver):
    match = resolver.match("  FERRITE   dust ")
    assert match.source == "exact"
    assert match.ingredient == "Ferrite Dust"
    assert match.score == 0.0


def test_exact_match_needs_no_fuzzy_step(catalog):
    strict = IngredientResolver(catalog, threshold=-1.0)
    result = strict.resolve(["SALT", "saltt"])
    assert result.mapped == ["Salt"]
    assert result.unknown == ["saltt"]


def test_exact_match_takes_precedence_over_fuzzy_candidate():
    # Both names share the key "sodium"; the lookup keeps the last one loaded
    # while a fuzzy scan would stop at "SODIUM", which sorts first.
    catalog = Catalog.from_recipes(
        [Recipe(("SODIUM",), "Sodium Nitrate", 1), Recipe(("Sodium",), "Salt", 1)]
    )
    match = IngredientResolver(catalog).match("sodium")
    assert match.source == "exact"
    assert match.ingredient == "Sodium"


def test_ties_go_to_first_candidate_alphabetically():
    catalog = Catalog.from_recipes([Recipe(("Cat", "Bat"), "Bats", 1)])
    match = IngredientResolver(catalog).match("at")
    assert match.ingredient == "Bat"
    assert match.score == 0.5


def test_substring_factor_is_applied_before_threshold(catalog):
    without_factor = IngredientResolver(catalog, substring_factor=1.0)
    assert without_factor.match("oxygenated") is None
    assert IngredientResolver(catalog).match("oxygenated").ingredient == "Oxygen"


def test_mapped_names_are_deduplicated(resolver):
    result = resolver.resolve(["salt", "SALT", "saltt", "water", "Salt"])
    assert result.mapped == ["Salt", "Water"]
    assert result.unknown == []


def test_resolve_normalizes_each_term_once(mocker, resolver):
    normalize = mocker.patch(
        "recipe_finder.ingredients.resolution.normalize_key", wraps=normalize_key
    )
    resolver.resolve(["salt", "watr", "  ", "phlogiston"])
    assert normalize.call_count == 4


def test_terms_without_a_key_are_dropped(resolver):
    result = resolver.resolve(["", "   ", "★ $", "carbon"])
    assert result.mapped == ["Carbon"]
    assert result.unknown == []


@pytest.mark.parametrize(
    "terms",
    [
        ["salt", "watr", "zzzzzzzzz", ""],
        ["Crème", "OXYGEN", "+++", "ferrite", "dust dust dust"],
    ],
)
def test_every_term_is_mapped_unknown_or_dropped(resolver, terms):
    result = resolver.resolve(terms)
    for term in terms:
        match = resolver.match(term)
        if not normalize_key(term):
            assert match is None
            assert term not in result.unknown
        elif match is None:
            assert term in result.unknown
        else:
            assert match.ingredient in result.mapped
            assert term not in result.unknown
