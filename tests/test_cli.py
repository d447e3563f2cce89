# tests/test_cli.py

import pytest

from shaum import cli


def test_date_shortcut(capsys):
    assert cli.main(["2024-04-10"]) == 0
    out = capsys.readouterr().out
    assert "Haram" in out
    assert "EidAlFitr" in out


def test_day_with_language(capsys):
    assert cli.main(["day", "2024-03-11", "--lang", "id"]) == 0
    out = capsys.readouterr().out
    assert "Wajib" in out
    assert "Puasa Ramadhan" in out


def test_hijri(capsys):
    assert cli.main(["hijri", "2024-03-11"]) == 0
    assert "1445-09-01 AH" in capsys.readouterr().out


def test_prayer(capsys):
    argv = ["prayer", "2024-03-15", "--lat", "-6.2088", "--lng", "106.8456", "--tz-offset", "7"]
    assert cli.main(argv) == 0
    out = capsys.readouterr().out
    assert "Fajr" in out and "Maghrib" in out
    assert "+0700" in out


def test_now_with_fixed_instant(capsys):
    argv = ["now", "--lat", "-6.2088", "--lng", "106.8456", "--at", "2024-04-09T12:00:00+00:00"]
    assert cli.main(argv) == 0
    out = capsys.readouterr().out
    assert "2024-04-10" in out
    assert "Haram" in out


def test_daud(capsys):
    assert cli.main(["daud", "2024-04-10", "2024-04-14", "--postpone"]) == 0
    out = capsys.readouterr().out
    assert "2024-04-11" in out
    assert "postponed=1" in out


def test_upcoming(capsys):
    assert cli.main(["upcoming", "2024-04-10", "--count", "3"]) == 0
    lines = [l for l in capsys.readouterr().out.splitlines() if l.strip()]
    assert len(lines) == 3
    assert lines[0].startswith("2024-04-11")


def test_year_table(capsys):
    assert cli.main(["diag", "year-table", "--from-year", "1445", "--to-year", "1445"]) == 0
    out = capsys.readouterr().out
    assert "2024-04-10" in out
    assert "2024-06-15" in out


def test_strict_out_of_range_exits_with_error():
    from shaum.core.errors import DateOutOfRange

    with pytest.raises(DateOutOfRange):
        cli.main(["day", "1900-01-01", "--strict"])


def test_upcoming_with_status(capsys):
    assert cli.main(["upcoming", "2024-04-01", "--count", "1", "--status", "Haram"]) == 0
    assert capsys.readouterr().out.startswith("2024-04-10")


def test_upcoming_rejects_unknown_status(capsys):
    with pytest.raises(SystemExit) as ei:
        cli.main(["upcoming", "2024-04-10", "--status", "Bogus"])
    assert ei.value.code == 2
    assert "invalid choice" in capsys.readouterr().err
