from user_api.services.stats_service import (
    average_age,
    city_counts,
    compute_stats,
    filter_users,
    rank_cities,
    round_half_up,
    top_cities,
)


def test_average_age_ignores_missing_ages(sample_users):
    # (30 + 25 + 40) / 3 = 31.67
    assert average_age(sample_users) == 32


def test_average_age_without_ages_is_zero():
    assert average_age([{"age": None}, {}]) == 0
    assert average_age([]) == 0


def test_round_half_up():
    assert round_half_up(27.5) == 28
    assert round_half_up(26.5) == 27
    assert round_half_up(26.49) == 26


def test_top_cities_most_common_first(sample_users):
    assert top_cities(sample_users) == ["London", "Paris"]


def test_top_cities_limit_and_tie_order():
    users = [{"city": c} for c in ["Rome", "Oslo", "Oslo", "Lima", "Kyiv", "Rome", "Bern"]]
    assert top_cities(users) == ["Oslo", "Rome", "Bern"]
    assert rank_cities({"b": 1, "a": 1}, limit=1) == ["a"]


def test_city_counts(sample_users):
    assert city_counts(sample_users) == {"London": 2, "Paris": 1}


def test_filter_users_matches_any_text_field(sample_users):
    assert [u["username"] for u in filter_users(sample_users, "LONDON")] == ["alice", "carol"]
    assert [u["username"] for u in filter_users(sample_users, "y.org")] == ["dave"]
    assert [u["username"] for u in filter_users(sample_users, "king")] == ["carol"]
    assert filter_users(sample_users, "zzz") == []


def test_filter_users_blank_term_returns_everything(sample_users):
    assert filter_users(sample_users, "") == sample_users
    assert filter_users(sample_users, None) == sample_users


def test_compute_stats(sample_users):
    assert compute_stats(sample_users) == {
        "totalUsers": 4,
        "averageAge": 32,
        "topCities": ["London", "Paris"],
    }
