"""Tests for the annotation planner - directive branch selection."""

import pytest
from sdmarkup.parsers import AnnotationPlanner, parse_params

MOVIE_SCOPE = "itemscope itemtype='https://schema.org/Movie'"
PERSON_SCOPE = "itemscope itemtype='https://schema.org/Person'"


@pytest.fixture
def planner(microdata) -> AnnotationPlanner:
    return AnnotationPlanner(microdata)


def plan(planner, text):
    return planner.display(parse_params(text))


class TestSetType:
    def test_bare_type_opens_scope(self, planner):
        assert plan(planner, "Movie") == MOVIE_SCOPE
        assert planner.renderer.get_type() == "Movie"

    def test_unknown_type_opens_thing_scope(self, planner):
        assert plan(planner, "Dragon") == "itemscope itemtype='https://schema.org/Thing'"

    def test_type_with_fallbacks_does_not_open_scope(self, planner):
        """With fallbacks present the Type only selects which fallback applies."""
        assert plan(planner, "Person name") == "itemprop='name'"
        assert planner.renderer.get_type() == "Person"


class TestFallbacks:
    @pytest.fixture
    def on_movie(self, planner):
        planner.renderer.set_type("Movie")
        return planner

    def test_global_property(self, on_movie):
        assert plan(on_movie, "name") == "itemprop='name'"

    def test_nested_expected_type_opens_scope(self, on_movie):
        assert plan(on_movie, "director.Person") == f"itemprop='director' {PERSON_SCOPE}"
        assert on_movie.renderer.get_type() == "Person"

    def test_unexpected_type_is_ignored(self, on_movie):
        assert plan(on_movie, "director.Organization") == "itemprop='director'"
        assert on_movie.renderer.get_type() == "Movie"

    def test_first_valid_global_wins(self, on_movie):
        assert plan(on_movie, "jobTitle legalName datePublished name") == "itemprop='datePublished'"

    def test_specialized_for_current_type(self, on_movie):
        assert plan(on_movie, "Person.jobTitle Movie.director.Person name") == f"itemprop='director' {PERSON_SCOPE}"

    def test_specialized_for_other_type_ignored(self, on_movie):
        assert plan(on_movie, "Person.jobTitle") == ""

    def test_invalid_specialized_falls_through_to_global(self, on_movie):
        assert plan(on_movie, "Movie.jobTitle name") == "itemprop='name'"

    def test_nothing_applies(self, on_movie):
        assert plan(on_movie, "jobTitle") == ""
        assert plan(on_movie, "") == ""


class TestDocumentFlow:
    def test_type_carries_between_directives(self, planner):
        fragments = [plan(planner, text) for text in ("Movie", "name", "director.Person", "name", "jobTitle")]
        assert fragments == [
            MOVIE_SCOPE,
            "itemprop='name'",
            f"itemprop='director' {PERSON_SCOPE}",
            "itemprop='name'",
            "itemprop='jobTitle'",
        ]

    def test_rdfa(self, rdfa):
        planner = AnnotationPlanner(rdfa)
        assert plan(planner, "Movie") == "vocab='https://schema.org' typeof='Movie'"
        assert plan(planner, "director.Person") == "property='director' vocab='https://schema.org' typeof='Person'"
