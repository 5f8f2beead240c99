"""
Tests du repository SQLModelAnimeRepository sur SQLite en memoire.

Ces tests verifient:
- CRUD complet (create, find_by_id, update, delete)
- find_by_query: filtres, recherche, tri et pagination sur le schema reel
- count_by_query == len(find_by_query sans pagination)
- Les colonnes ajoutees a la table deviennent filtrables sans changement de code
"""

import pytest
from sqlalchemy import text

from jikan_lite.core.exceptions import AnimePersistenceError
from jikan_lite.core.value_objects.query_options import QueryOptions
from jikan_lite.infrastructure.persistence.repositories import SQLModelAnimeRepository


@pytest.fixture
def catalog(repository: SQLModelAnimeRepository, make_anime):
    """Quatre animes de types et annees differents."""

    def entry(mal_id, title, **overrides):
        return make_anime(
            mal_id,
            title=title,
            title_english=None,
            titles=[{"type": "Default", "title": title}],
            **overrides,
        )

    items = [
        entry(1, "Cowboy Bebop", type="TV", year=1998, score=8.75),
        entry(5, "Cowboy Bebop: Tengoku no Tobira", type="Movie", year=2001, score=8.38),
        entry(6, "Trigun", type="TV", year=1998, score=8.22),
        entry(7, "Witch Hunter Robin", type="TV", year=2002, score=7.25, airing=True),
    ]
    for anime in items:
        repository.create(anime)
    return items


class TestCrud:
    """Tests CRUD."""

    def test_create_and_find_by_id(self, repository, make_anime):
        anime = make_anime(1)
        repository.create(anime)
        assert repository.find_by_id(1) == anime

    def test_find_by_id_missing(self, repository):
        assert repository.find_by_id(999) is None

    def test_create_invalid_entity_raises(self, repository, make_anime):
        with pytest.raises(AnimePersistenceError):
            repository.create(make_anime(mal_id=0))

    def test_update_existing(self, repository, make_anime):
        repository.create(make_anime(1, score=8.0))

        updated = repository.update(1, make_anime(1, score=9.1, airing=True))

        assert updated is not None
        assert updated.score == 9.1
        assert updated.airing is True
        assert repository.find_by_id(1).score == 9.1

    def test_update_uses_argument_id(self, repository, make_anime):
        repository.create(make_anime(1, title="Old"))
        updated = repository.update(1, make_anime(99, title="New"))

        assert updated.mal_id == 1
        assert updated.title == "New"
        assert repository.find_by_id(99) is None

    def test_update_missing_returns_none(self, repository, make_anime):
        assert repository.update(404, make_anime(404)) is None

    def test_delete(self, repository, make_anime):
        repository.create(make_anime(1))
        assert repository.delete(1) is True
        assert repository.find_by_id(1) is None
        assert repository.delete(1) is False

    def test_find_all_and_count_all(self, repository, catalog):
        assert {anime.mal_id for anime in repository.find_all()} == {1, 5, 6, 7}
        assert repository.count_all() == 4


class TestFindByQuery:
    """Tests des lectures dynamiques."""

    def test_filter(self, repository, catalog):
        results = repository.find_by_query(QueryOptions(filters={"type": "TV"}))
        assert {anime.mal_id for anime in results} == {1, 6, 7}

    def test_filter_values_from_query_string(self, repository, catalog):
        """Les valeurs HTTP (chaines) filtrent aussi les colonnes numeriques."""
        options = QueryOptions.from_params({"year": "1998", "orderBy": "mal_id"})
        assert [anime.mal_id for anime in repository.find_by_query(options)] == [1, 6]

    def test_unknown_filter_ignored(self, repository, catalog):
        results = repository.find_by_query(QueryOptions(filters={"nope": "x"}))
        assert len(results) == 4

    def test_search_is_case_insensitive_substring(self, repository, catalog):
        results = repository.find_by_query(QueryOptions(search="bebop", order_by="mal_id"))
        assert [anime.mal_id for anime in results] == [1, 5]

    def test_order_and_pagination(self, repository, catalog):
        options = QueryOptions(order_by="score", order_direction="DESC", page=2, limit=2)
        assert [anime.mal_id for anime in repository.find_by_query(options)] == [6, 7]

    def test_page_beyond_end(self, repository, catalog):
        assert repository.find_by_query(QueryOptions(page=10, limit=2)) == []

    @pytest.mark.parametrize(
        "options",
        [
            QueryOptions(),
            QueryOptions(filters={"type": "TV"}),
            QueryOptions(search="cowboy"),
            QueryOptions(search="cowboy", filters={"type": "Movie"}),
            QueryOptions(filters={"year": 1998}, page=1, limit=1),
        ],
    )
    def test_count_matches_unpaginated_find(self, repository, catalog, options):
        count = repository.count_by_query(options)
        assert count == len(repository.find_by_query(options.without_pagination()))


class TestSchemaDiscovery:
    """Les colonnes sont lues dans le schema reel."""

    def test_added_column_becomes_filterable(self, repository, catalog, session):
        session.connection().execute(text('ALTER TABLE "anime" ADD COLUMN "rank_tier" VARCHAR'))
        session.connection().execute(text('UPDATE "anime" SET "rank_tier" = \'top\' WHERE "mal_id" = 1'))
        session.commit()

        results = repository.find_by_query(QueryOptions(filters={"rank_tier": "top"}))
        assert [anime.mal_id for anime in results] == [1]
