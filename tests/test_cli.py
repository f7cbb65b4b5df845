import io
import sys

import pytest

import day_totals.cli as cli


def _run_main_with_args(args, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["prog"] + args)
    cli.main()
    return capsys.readouterr()


def _ranges_file(tmp_path, text):
    p = tmp_path / "ranges.csv"
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_cli_prints_rows(monkeypatch, capsys, tmp_path):
    path = _ranges_file(tmp_path, "2013-02-18,2013-02-19\n")
    res = _run_main_with_args(
        [path, "--date", "2013-02-20", "--window", "180", "--history", "4", "--max", "45"],
        monkeypatch,
        capsys,
    )
    assert res.out.splitlines() == [
        ",2013-02-17,,,0,45",
        "*,2013-02-18,1,1,1,44",
        "*,2013-02-19,1,2,2,43",
        ",2013-02-20,,,2,43",
    ]
    assert res.err == ""


def test_cli_without_max_has_five_columns(monkeypatch, capsys, tmp_path):
    path = _ranges_file(tmp_path, "2013-02-18,2013-02-18\n")
    res = _run_main_with_args([path, "-d", "2013-02-18", "-w", "10", "-n", "1"], monkeypatch, capsys)
    assert res.out == "*,2013-02-18,1,1,1\n"


def test_cli_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("2002-03-02,2002-03-02\n"))
    res = _run_main_with_args(["-d", "2002-03-03", "-w", "365", "-n", "3"], monkeypatch, capsys)
    assert res.out.splitlines() == [
        ",2002-03-01,,,0",
        "*,2002-03-02,1,1,1",
        ",2002-03-03,,,1",
    ]


def test_cli_exclusive(monkeypatch, capsys, tmp_path):
    path = _ranges_file(tmp_path, "2002-03-02,2002-03-03\n")
    res = _run_main_with_args([path, "-d", "2002-03-03", "-w", "5", "-n", "2", "--exclusive"], monkeypatch, capsys)
    assert res.out.splitlines() == [
        ",2002-03-02,0,,0",
        "*,2002-03-03,1,1,1",
    ]


def test_cli_reset_and_from(monkeypatch, capsys, tmp_path):
    path = _ranges_file(tmp_path, "2001-03-05,2002-03-04\n")
    res = _run_main_with_args(
        [path, "-d", "2002-03-04", "-f", "2001-03-04", "-r", "01-01", "-n", "1"],
        monkeypatch,
        capsys,
    )
    assert res.out == "*,2002-03-04,1,1,63\n"


def test_cli_today_override(monkeypatch, capsys, tmp_path):
    path = _ranges_file(tmp_path, "2019-02-03,2019-02-03\n")
    res = _run_main_with_args([path, "--today", "2019-02-03", "-w", "3", "-n", "1"], monkeypatch, capsys)
    assert res.out == "*,2019-02-03,1,1,1\n"


def test_cli_config_defaults_and_override(monkeypatch, capsys, tmp_path):
    path = _ranges_file(tmp_path, "2013-02-18,2013-02-19\n")
    conf = tmp_path / "day-totals.conf"
    conf.write_text('option "window" "180"\noption "max" "45"\noption "history" "2"\n', encoding="utf-8")

    res = _run_main_with_args([path, "-d", "2013-02-19", "--config", str(conf)], monkeypatch, capsys)
    assert res.out.splitlines() == ["*,2013-02-18,1,1,1,44", "*,2013-02-19,1,2,2,43"]

    res = _run_main_with_args([path, "-d", "2013-02-19", "--config", str(conf), "-x", "2"], monkeypatch, capsys)
    assert res.out.splitlines()[-1] == "*,2013-02-19,1,2,2,0"


def test_cli_window_flag_overrides_config_from(monkeypatch, capsys, tmp_path):
    path = _ranges_file(tmp_path, "2013-02-18,2013-02-19\n")
    conf = tmp_path / "day-totals.conf"
    conf.write_text('option "from" "2013-02-19"\n', encoding="utf-8")
    res = _run_main_with_args([path, "-d", "2013-02-19", "-w", "1", "-n", "1", "--config", str(conf)], monkeypatch, capsys)
    assert res.out == "*,2013-02-19,1,1,1\n"


def test_cli_prints_messages_to_stderr(monkeypatch, capsys, tmp_path):
    path = _ranges_file(tmp_path, "2013-02-18,2013-03-01\n")
    res = _run_main_with_args([path, "-d", "2013-02-19", "-w", "10", "-n", "1", "-x", "1"], monkeypatch, capsys)
    assert "[INFO] ranges-after-date:" in res.err
    assert "[WARNING] over-max:" in res.err
    assert res.out == "*,2013-02-19,1,1,2,-1\n"


@pytest.mark.parametrize(
    "args",
    [
        ["-d", "30-01-2017"],
        ["-w", "-1"],
        ["-x", "-1"],
        ["-d", "2019-02-03", "-f", "2019-02-04"],
        ["--today", "today"],
    ],
)
def test_cli_validation_errors_exit_1(monkeypatch, capsys, tmp_path, args):
    path = _ranges_file(tmp_path, "")
    with pytest.raises(SystemExit) as ei:
        _run_main_with_args([path] + args, monkeypatch, capsys)
    assert ei.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("error: ")


def test_cli_malformed_line(monkeypatch, capsys, tmp_path):
    path = _ranges_file(tmp_path, "2013-02-18,2013-02-19\n2013-02-18\n")
    with pytest.raises(SystemExit) as ei:
        _run_main_with_args([path, "-d", "2013-02-19"], monkeypatch, capsys)
    assert ei.value.code == 1
    assert "line 2" in capsys.readouterr().err


def test_cli_missing_file(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as ei:
        _run_main_with_args([str(tmp_path / "absent.csv"), "-d", "2013-02-19"], monkeypatch, capsys)
    assert ei.value.code == 1


def test_cli_from_and_window_are_exclusive(monkeypatch, capsys):
    with pytest.raises(SystemExit) as ei:
        _run_main_with_args(["-f", "2013-01-01", "-w", "10"], monkeypatch, capsys)
    assert ei.value.code == 2


def test_cli_help(monkeypatch, capsys):
    with pytest.raises(SystemExit) as ei:
        _run_main_with_args(["--help"], monkeypatch, capsys)
    assert ei.value.code == 0
    assert "--window" in capsys.readouterr().out


@pytest.mark.parametrize(
    "args",
    [
        ["-d", "0001-06-01"],
        ["-d", "0001-01-05", "-w", "10"],
    ],
)
def test_cli_calendar_edges_exit_1(monkeypatch, capsys, tmp_path, args):
    path = _ranges_file(tmp_path, "")
    with pytest.raises(SystemExit) as ei:
        _run_main_with_args([path] + args, monkeypatch, capsys)
    assert ei.value.code == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_cli_range_on_last_date(monkeypatch, capsys, tmp_path):
    path = _ranges_file(tmp_path, "9999-12-30,9999-12-31\n")
    res = _run_main_with_args([path, "-d", "9999-12-31", "-w", "2", "-n", "2"], monkeypatch, capsys)
    assert res.out.splitlines() == [
        "*,9999-12-30,1,1,1",
        "*,9999-12-31,1,2,2",
    ]
