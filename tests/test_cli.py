"""Tests for the command-line client."""

import httpx
import pytest

from savorist import config as config_module
from savorist.cli import SavoristCLI, format_restaurant
from savorist.client import FavoritesStore, ProfileStore, SavoristClient
from savorist.config import Config
from savorist.server import create_app


@pytest.fixture
def cli(tmp_path, monkeypatch):
    """Create a CLI whose preferences live in a temporary directory."""
    monkeypatch.setattr(
        config_module, "config", Config(preferences_dir=tmp_path / "prefs")
    )
    return SavoristCLI()


@pytest.fixture
async def api(query_service):
    """Create an API client bound to the app in-process."""
    transport = httpx.ASGITransport(app=create_app(query_service))
    async with SavoristClient("http://testserver", 5.0, transport=transport) as client:
        yield client


class TestFormatting:
    """Tests for output formatting."""

    def test_format_restaurant(self, query_service):
        restaurant = query_service.list_restaurants()[0]

        line = format_restaurant(1, restaurant, favorite=True)

        assert line.startswith(" 1. ♥ Bella Vista Italian - Italian")
        assert "★ 4.8" in line


class TestCommands:
    """Tests for individual commands."""

    async def test_unknown_command(self, cli, capsys):
        await cli.handle("teleport")
        assert "Unknown command" in capsys.readouterr().out

    async def test_list_remembers_results(self, cli, api, capsys):
        await cli._cmd_list(api, [])

        out = capsys.readouterr().out
        assert "Bella Vista Italian" in out
        assert len(cli.last_results) == 6
        assert cli._resolve("2") == cli.last_results[1].id
        assert cli._resolve("99") == "99"

    async def test_filter_rejects_bad_rating(self, cli, api, capsys):
        await cli._cmd_filter(api, ["rating=high"])
        assert "rating must be a number" in capsys.readouterr().out

    async def test_fav_toggles_by_number(self, cli, api, capsys):
        await cli._cmd_list(api, [])
        restaurant_id = cli.last_results[0].id

        await cli._cmd_fav(api, ["1"])
        assert await FavoritesStore(cli.storage).get_favorites() == [restaurant_id]

        await cli._cmd_fav(api, ["1"])
        assert await FavoritesStore(cli.storage).get_favorites() == []

    async def test_favorites_lists_saved(self, cli, api, capsys):
        await cli._cmd_list(api, [])
        await cli._cmd_fav(api, ["3"])
        capsys.readouterr()

        await cli._cmd_favorites(api, [])

        out = capsys.readouterr().out
        assert "Spice Garden" in out
        assert "Sushi Zen" not in out

    async def test_review_uses_profile_name(self, cli, api, capsys):
        await ProfileStore(cli.storage).update_profile(display_name="Alex")
        await cli._cmd_list(api, [])

        await cli._cmd_review(api, ["1", "5", "Lovely", "pasta"])

        reviews = await api.get_reviews(cli.last_results[0].id)
        mine = [r for r in reviews if r.reviewer_name == "Alex"]
        assert len(mine) == 1
        assert mine[0].comment == "Lovely pasta"
        assert "Review posted" in capsys.readouterr().out

    async def test_review_rejects_out_of_range(self, cli, api, capsys):
        await cli._cmd_review(api, ["1", "9"])
        assert "between 1 and 5" in capsys.readouterr().out

    async def test_show_unknown_restaurant(self, cli, api, capsys):
        await cli._cmd_show(api, ["nonexistent"])
        assert "Restaurant not found." in capsys.readouterr().out

    async def test_profile_commands(self, cli, api, capsys):
        await cli._cmd_name(api, ["Sam", "Lee"])
        await cli._cmd_notifications(api, ["off"])
        capsys.readouterr()

        await cli._cmd_profile(api, [])

        out = capsys.readouterr().out
        assert "Name: Sam Lee" in out
        assert "Notifications: off" in out
