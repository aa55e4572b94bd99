from factories import FakeTautulliClient, episode_item, make_page, movie_item
from tautops.tautulli.history import get_item_history, history_movie_to_history
from tautops.tautulli.models import MediaType


def test_movie_history_gets_empty_episode_fields():
    page = make_page([movie_item("a", 100, pct=50, duration=1200), movie_item("b", 150, pct=10)], draw=7)

    history = history_movie_to_history(page)

    assert history["draw"] == 7
    assert history["recordsTotal"] == page["recordsTotal"]
    assert history["recordsFiltered"] == page["recordsFiltered"]
    assert history["data"][0] == {
        "user": "a",
        "date": 100,
        "duration": 1200,
        "percent_complete": 50,
        "media_index": None,
        "parent_media_index": None,
    }
    assert [item["user"] for item in history["data"]] == ["a", "b"]


def test_movie_history_ignores_extra_fields():
    item = dict(movie_item("a", 100), friendly_name="Alice", media_index=4)

    history = history_movie_to_history(make_page([item]))

    assert history["data"][0]["media_index"] is None
    assert "friendly_name" not in history["data"][0]


def test_get_item_history_movie_is_normalized(recording_logger):
    client = FakeTautulliClient(make_page([movie_item("a", 1)]))

    history = get_item_history(client, "10", MediaType.MOVIE, logger=recording_logger)

    assert client.calls == [("get_history", {"rating_key": "10"})]
    assert history["data"][0]["parent_media_index"] is None


def test_get_item_history_tv_is_passed_through(recording_logger):
    page = make_page([episode_item("a", 1, season=4, episode=2)])
    client = FakeTautulliClient(page)

    history = get_item_history(client, "20", MediaType.TV, logger=recording_logger)

    assert client.calls == [("get_history", {"grandparent_rating_key": "20"})]
    assert history is page
