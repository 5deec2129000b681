from __future__ import annotations

from tagging import DEFAULT_CITIES, DEFAULT_TECHS, TagExtractor, Tags


def test_extracts_techs_and_cities_in_reference_order() -> None:
    extractor = TagExtractor()

    tags = extractor.extract("Estágio React e Python em Curitiba ou Porto Alegre, usando Docker")

    assert tags.techs == ("react", "python", "docker")
    assert tags.cities == ("porto alegre", "curitiba")


def test_matching_is_case_insensitive_substring() -> None:
    tags = TagExtractor().extract("JAVASCRIPT developer in FLORIANÓPOLIS")

    # "java" is a substring of "javascript"
    assert tags.techs == ("java", "javascript")
    assert tags.cities == ("florianópolis",)


def test_repeated_keywords_are_reported_once() -> None:
    tags = TagExtractor().extract("java java JAVA, Joinville joinville")

    assert tags.techs.count("java") == 1
    assert tags.cities == ("joinville",)


def test_no_matches_returns_empty_tags() -> None:
    assert TagExtractor().extract("") == Tags()
    assert TagExtractor().extract("nothing relevant here") == Tags()


def test_results_are_subsets_of_reference_lists() -> None:
    text = " ".join(DEFAULT_TECHS + DEFAULT_CITIES)
    tags = TagExtractor().extract(text)

    assert set(tags.techs) <= set(DEFAULT_TECHS)
    assert set(tags.cities) <= set(DEFAULT_CITIES)
    assert len(tags.techs) == len(set(tags.techs))
    assert len(tags.cities) == len(set(tags.cities))


def test_custom_keyword_lists() -> None:
    extractor = TagExtractor(techs=["Rust", "rust", "Elixir"], cities=["Recife"])

    assert extractor.techs == ("rust", "elixir")
    tags = extractor.extract("Rust backend in recife")
    assert tags == Tags(techs=("rust",), cities=("recife",))
