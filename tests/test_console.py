"""Tests for the console front-end driving both screens."""

import io

import pytest
import pytest_asyncio

from sleeptracker.ui.console import QUALITY_SCREEN, TRACKER_SCREEN, ConsoleApp


@pytest_asyncio.fixture
async def app(repo, clock):
    console = ConsoleApp(repo, stdin=io.StringIO(), stdout=io.StringIO(), clock=clock)
    await console.show_tracker()
    yield console
    await console.shutdown()


def output(app: ConsoleApp) -> str:
    return app.stdout.getvalue()


class TestConsoleApp:
    @pytest.mark.asyncio
    async def test_full_night(self, app: ConsoleApp, repo, clock):
        assert app.screen == TRACKER_SCREEN
        await app.handle("start")
        clock.advance(hours=8)
        await app.handle("stop")
        assert app.screen == QUALITY_SCREEN
        assert not app.tracker

        await app.handle("rate 5")
        assert app.screen == TRACKER_SCREEN
        assert "Rating saved." in output(app)

        nights = await repo.get_all_nights()
        assert nights[0].sleep_quality == 5
        assert app.tracker.start_enabled

        await app.handle("history")
        assert "Excellent" in output(app)

    @pytest.mark.asyncio
    async def test_disabled_actions(self, app: ConsoleApp, repo):
        await app.handle("stop")
        assert "Nothing to stop." in output(app)
        await app.handle("clear")
        assert "Nothing to clear." in output(app)
        await app.handle("start")
        await app.handle("start")
        assert "already being tracked" in output(app)
        assert await repo.count() == 1

    @pytest.mark.asyncio
    async def test_clear_shows_message_once(self, app: ConsoleApp, repo):
        await app.handle("start")
        await app.handle("clear")
        assert output(app).count("All sleep data has been cleared.") == 1
        assert not app.tracker.show_snackbar_event.pending
        assert await repo.count() == 0

    @pytest.mark.asyncio
    async def test_rating_screen_input(self, app: ConsoleApp, clock):
        await app.handle("start")
        clock.advance(hours=6)
        await app.handle("stop")

        await app.handle("great")
        assert "Enter a rating from 0 to 5" in output(app)
        await app.handle("7")
        assert "Error: Sleep quality must be between 0 and 5" in output(app)
        assert app.screen == QUALITY_SCREEN

        await app.handle("skip")
        assert app.screen == TRACKER_SCREEN

    @pytest.mark.asyncio
    async def test_quit(self, app: ConsoleApp):
        assert await app.handle("") is True
        assert await app.handle("help") is True
        assert await app.handle("quit") is False

    @pytest.mark.asyncio
    async def test_run_until_eof(self, repo, clock):
        stdin = io.StringIO("start\nhistory\n")
        stdout = io.StringIO()
        console = ConsoleApp(repo, stdin=stdin, stdout=stdout, clock=clock)
        await console.run()
        assert "Tracking started" in stdout.getvalue()
        assert console.screen is None
        assert await repo.count() == 1
