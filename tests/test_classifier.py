"""Tests for the line classifier (qlog.classifier).

Tests cover: every recognized marker, timestamp handling, malformed fields
degrading to None, unknown cause codes, exit-reason policy, and purity.
"""

import logging

import pytest

from qlog.classifier import classify, parse_info_string, split_line
from qlog.config import ParserConfig
from qlog.events import (
    ClientBegin,
    ClientConnect,
    ClientDisconnect,
    ItemPickup,
    Kill,
    MatchEnd,
    MatchStart,
    Scoreboard,
    UserInfo,
)
from qlog.means_of_death import MeansOfDeath
from qlog.state import EndReason

INIT_LINE = (
    r"  0:00 InitGame: \sv_floodProtect\1\sv_hostname\Code Miner Server"
    r"\g_gametype\0\fraglimit\20\timelimit\15\mapname\q3dm17\gamename\baseq3"
)
USERINFO_LINE = (
    r" 20:34 ClientUserinfoChanged: 2 n\Isgalamido\t\0\model\xian/default"
    r"\hmodel\xian/default\g_redteam\\g_blueteam\\c1\4\c2\5\hc\100"
)


# ---------------------------------------------------------------------------
# TestSplitLine
# ---------------------------------------------------------------------------
class TestSplitLine:
    def test_indented_timestamp(self):
        assert split_line("  0:00 InitGame:") == ("0:00", "InitGame:")

    def test_long_timestamp(self):
        assert split_line("981:27 Kill: 1 2 3") == ("981:27", "Kill: 1 2 3")

    def test_no_timestamp(self):
        assert split_line("ClientConnect: 2") == (None, "ClientConnect: 2")

    def test_trailing_newline_stripped(self):
        assert split_line(" 20:37 ShutdownGame:\n") == ("20:37", "ShutdownGame:")


# ---------------------------------------------------------------------------
# TestMatchBoundaries -- InitGame / Exit / ShutdownGame
# ---------------------------------------------------------------------------
class TestMatchBoundaries:
    def test_init_game_with_settings(self):
        event = classify(INIT_LINE)
        assert isinstance(event, MatchStart)
        assert event.timestamp == "0:00"
        assert event.settings["mapname"] == "q3dm17"
        assert event.settings["sv_hostname"] == "Code Miner Server"
        assert event.settings["fraglimit"] == "20"

    def test_init_game_without_settings(self):
        event = classify("InitGame ...")
        assert event == MatchStart(settings={}, timestamp=None)

    def test_shutdown_game(self):
        event = classify(" 20:37 ShutdownGame:")
        assert event == MatchEnd(reason=EndReason.SHUTDOWN, timestamp="20:37")

    def test_exit_timelimit(self):
        event = classify(" 15:00 Exit: Timelimit hit.")
        assert event == MatchEnd(reason=EndReason.TIMELIMIT, timestamp="15:00")

    def test_exit_fraglimit(self):
        assert classify("Exit: Fraglimit hit.").reason == EndReason.FRAGLIMIT

    def test_exit_capturelimit(self):
        assert classify("Exit: Capturelimit hit.").reason == EndReason.CAPTURELIMIT

    def test_exit_unrecognized_reason(self):
        assert classify("Exit: Server restarted.").reason == EndReason.UNSPECIFIED

    def test_exit_without_text(self):
        assert classify("Exit:").reason == EndReason.UNSPECIFIED

    def test_exit_policy_from_config(self):
        config = ParserConfig(exit_reasons=(("restarted", EndReason.SHUTDOWN),))
        event = classify("Exit: Server restarted.", config)
        assert event.reason == EndReason.SHUTDOWN
        # Default markers no longer apply under a replaced policy
        assert classify("Exit: Timelimit hit.", config).reason == EndReason.UNSPECIFIED


# ---------------------------------------------------------------------------
# TestClientEvents
# ---------------------------------------------------------------------------
class TestClientEvents:
    def test_client_connect(self):
        assert classify(" 20:34 ClientConnect: 2") == ClientConnect(
            client_id=2, timestamp="20:34"
        )

    def test_client_begin(self):
        assert classify(" 20:37 ClientBegin: 2") == ClientBegin(
            client_id=2, timestamp="20:37"
        )

    def test_client_disconnect(self):
        assert classify(" 21:10 ClientDisconnect: 2") == ClientDisconnect(
            client_id=2, timestamp="21:10"
        )

    def test_userinfo_name_and_team(self):
        event = classify(USERINFO_LINE)
        assert event == UserInfo(
            client_id=2, name="Isgalamido", team=0, timestamp="20:34"
        )

    def test_userinfo_name_with_spaces(self):
        event = classify(r"ClientUserinfoChanged: 3 n\Dono da Bola\t\0\model\sarge")
        assert event.name == "Dono da Bola"
        assert event.client_id == 3

    def test_userinfo_without_team(self):
        event = classify(r"ClientUserinfoChanged: 5 n\Zeh")
        assert event == UserInfo(client_id=5, name="Zeh", team=None)

    def test_userinfo_without_name_key(self):
        assert classify(r"ClientUserinfoChanged: 2 t\0\model\xian") is None

    def test_userinfo_non_numeric_id(self):
        assert classify(r"ClientUserinfoChanged: x n\Isgalamido\t\0") is None

    def test_connect_missing_id(self):
        assert classify(" 20:34 ClientConnect:") is None

    def test_connect_non_numeric_id(self):
        assert classify("ClientConnect: two") is None

    def test_connect_negative_id(self):
        assert classify("ClientConnect: -1") is None


# ---------------------------------------------------------------------------
# TestItemEvents
# ---------------------------------------------------------------------------
class TestItemEvents:
    def test_item_pickup(self):
        assert classify(" 20:40 Item: 2 weapon_rocketlauncher") == ItemPickup(
            client_id=2, item_code="weapon_rocketlauncher", timestamp="20:40"
        )

    def test_item_missing_code(self):
        assert classify(" 20:40 Item: 2") is None

    def test_item_non_numeric_client(self):
        assert classify("Item: two weapon_shotgun") is None


# ---------------------------------------------------------------------------
# TestKillEvents
# ---------------------------------------------------------------------------
class TestKillEvents:
    def test_player_kill(self):
        event = classify(" 22:06 Kill: 2 3 7: Isgalamido killed Mocinha by MOD_ROCKET_SPLASH")
        assert event == Kill(
            killer_id=2,
            victim_id=3,
            cause=MeansOfDeath.MOD_ROCKET_SPLASH,
            timestamp="22:06",
        )

    def test_world_kill(self):
        event = classify(" 20:54 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT")
        assert event.killer_id == 1022
        assert event.victim_id == 2
        assert event.cause is MeansOfDeath.MOD_TRIGGER_HURT

    def test_kill_without_description(self):
        event = classify("Kill: 2 3 6")
        assert event == Kill(killer_id=2, victim_id=3, cause=MeansOfDeath.MOD_ROCKET)

    def test_unknown_cause_code(self):
        event = classify("Kill: 2 3 99: a killed b by MOD_SOMETHING_NEW")
        assert event.cause is MeansOfDeath.MOD_UNKNOWN

    def test_kill_missing_cause(self):
        assert classify("Kill: 2 3: a killed b") is None

    def test_kill_non_numeric_victim(self):
        assert classify("Kill: 2 x 6: a killed b by MOD_ROCKET") is None

    def test_player_named_kill_is_not_a_kill(self):
        """Marker must start the body, not just appear in it."""
        event = classify(r"ClientUserinfoChanged: 4 n\Kill: 1 2 3\t\1")
        assert isinstance(event, UserInfo)
        assert event.name == "Kill: 1 2 3"


# ---------------------------------------------------------------------------
# TestScoreboard
# ---------------------------------------------------------------------------
class TestScoreboard:
    def test_score_line(self):
        event = classify(" 24:13 score: 20  ping: 4  client: 2 Oootsimo")
        assert event == Scoreboard(
            client_id=2, score=20, ping=4, name="Oootsimo", timestamp="24:13"
        )

    def test_negative_score(self):
        event = classify("score: -3  ping: 0  client: 5 Assasinu Credi")
        assert event.score == -3
        assert event.name == "Assasinu Credi"

    def test_score_missing_name(self):
        assert classify("score: 20  ping: 4  client: 2") is None

    def test_score_non_numeric_ping(self):
        assert classify("score: 20  ping: n/a  client: 2 Oootsimo") is None

    def test_score_missing_ping(self):
        assert classify("score: 20  client: 2 Oootsimo") is None

    def test_score_negative_ping(self):
        assert classify("score: 5  ping: -1  client: 2 Bob") is None


# ---------------------------------------------------------------------------
# TestUnrecognizedLines
# ---------------------------------------------------------------------------
class TestUnrecognizedLines:
    @pytest.mark.parametrize(
        "line",
        [
            "",
            "   ",
            "  0:00 ------------------------------------------------------------",
            " 24:13 red:8  blue:6",
            " 12:01 say: Isgalamido: gg",
            "20:34",
            "Items: 2 weapon_shotgun",
            "Killer instinct",
            "ClientUserinfo: n\\Oootsimo\\t\\0",
        ],
    )
    def test_returns_none(self, line):
        assert classify(line) is None

    @pytest.mark.parametrize(
        "line",
        [
            " 12:01 say: Isgalamido: gg",
            INIT_LINE,
            " 22:06 Kill: 2 3 7: Isgalamido killed Mocinha by MOD_ROCKET_SPLASH",
            "Kill: 2 x 6",
        ],
    )
    def test_classify_is_idempotent(self, line):
        assert classify(line) == classify(line)

    def test_malformed_line_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="qlog.classifier"):
            assert classify("Kill: 2 x 6") is None
        records = [r for r in caplog.records if r.name == "qlog.classifier"]
        assert len(records) == 1
        assert records[0].levelno == logging.DEBUG
        assert "Kill" in records[0].getMessage()


# ---------------------------------------------------------------------------
# TestInfoString / TestMeansOfDeath
# ---------------------------------------------------------------------------
class TestInfoString:
    def test_leading_backslash(self):
        assert parse_info_string(r"\mapname\q3dm17\fraglimit\20") == {
            "mapname": "q3dm17",
            "fraglimit": "20",
        }

    def test_empty_values_kept(self):
        assert parse_info_string(r"\g_redteam\\g_blueteam\\c1\4") == {
            "g_redteam": "",
            "g_blueteam": "",
            "c1": "4",
        }

    def test_dangling_key_ignored(self):
        assert parse_info_string(r"\mapname\q3dm17\orphan") == {"mapname": "q3dm17"}


class TestMeansOfDeath:
    def test_known_code(self):
        assert MeansOfDeath(22) is MeansOfDeath.MOD_TRIGGER_HURT

    def test_unknown_code_falls_back(self):
        assert MeansOfDeath(1000) is MeansOfDeath.MOD_UNKNOWN

    def test_from_code_string(self):
        assert MeansOfDeath.from_code("19") is MeansOfDeath.MOD_FALLING

    def test_from_code_rejects_garbage(self):
        with pytest.raises(ValueError):
            MeansOfDeath.from_code("rocket")

    def test_label(self):
        assert MeansOfDeath.MOD_ROCKET_SPLASH.label == "rocket splash"
