from datetime import UTC, datetime

import pytest

from tautops.tautulli.models import MediaType, UserEpisodeWatch, UserMovieWatch, WatchHistory


@pytest.mark.parametrize(
    "value, expected",
    [
        ("movie", MediaType.MOVIE),
        ("TV", MediaType.TV),
        (" show ", MediaType.TV),
        ("episode", MediaType.TV),
        ("Season", MediaType.TV),
    ],
)
def test_media_type_from_str(value, expected):
    assert MediaType.from_str(value) is expected


def test_media_type_from_str_rejects_unknown():
    with pytest.raises(ValueError, match="artist"):
        MediaType.from_str("artist")


def test_history_param():
    assert MediaType.MOVIE.history_param == "rating_key"
    assert MediaType.TV.history_param == "grandparent_rating_key"


def test_watch_history_to_dict():
    when = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
    history = WatchHistory(
        media_type=MediaType.TV,
        rating_key="12",
        watches=(UserEpisodeWatch(display_name="a", last_watched=when, progress=40, season=1, episode=2),),
    )

    assert history.to_dict() == {
        "media_type": "tv",
        "rating_key": "12",
        "watches": [
            {
                "display_name": "a",
                "last_watched": "2024-01-02T03:04:05+00:00",
                "progress": 40,
                "season": 1,
                "episode": 2,
            }
        ],
    }


def test_movie_watch_to_dict_has_no_episode_keys():
    watch = UserMovieWatch(display_name="a", last_watched=datetime(2024, 1, 1, tzinfo=UTC), progress=100)

    assert set(watch.to_dict()) == {"display_name", "last_watched", "progress"}
