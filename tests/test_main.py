"""
CLI tests
"""

import pytest

import main


@pytest.fixture
def cli_db(fake_db, monkeypatch):
    monkeypatch.setattr(main, "SupabaseDB", lambda: fake_db)
    return fake_db


class TestParser:

    def test_commands(self):
        parser = main.build_parser()
        assert parser.parse_args(["leaderboard", "s1"]).season_id == "s1"
        assert parser.parse_args(["recalc-bonus", "g1", "g2"]).game_ids == ["g1", "g2"]
        assert parser.parse_args(["serve", "--port", "9000"]).port == 9000

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args([])


class TestCommands:

    def test_leaderboard(self, cli_db, capsys):
        assert main.main(["leaderboard", "s1"]) == 0
        out = capsys.readouterr().out
        assert "Season s1" in out
        assert "alice" in out

    def test_recalc_bonus(self, cli_db, capsys):
        assert main.main(["recalc-bonus", "g1", "g2"]) == 0
        assert cli_db.scores["sc1"].bonus_points == 1
        assert "Succeeded: 2/2" in capsys.readouterr().out

    def test_recalc_handicaps_reports_failures(self, cli_db, capsys):
        cli_db.fail_players.add("p1")
        assert main.main(["recalc-handicaps"]) == 1
        assert "alice: connection reset" in capsys.readouterr().out

    def test_init_failure(self, monkeypatch):
        def no_credentials():
            raise ValueError("Set the SUPABASE_URL and SUPABASE_KEY environment variables")

        monkeypatch.setattr(main, "SupabaseDB", no_credentials)
        assert main.main(["recalc-handicaps"]) == 1
