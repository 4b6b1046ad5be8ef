import json

from tcgswiss.testing.__main__ import (
    COMMANDS,
    SUBCOMMANDS,
    create_command_parser,
    create_completer,
    main,
)


def test_completer_offers_both_command_formats():
    options = create_completer().options

    for cmd in COMMANDS:
        assert cmd in options
        assert f"/{cmd}" in options
    assert "/list" in options


def test_every_runnable_command_is_documented():
    assert set(SUBCOMMANDS) <= set(COMMANDS)


def test_slash_prefix_is_stripped():
    for typed in ["/generate", "generate", "/plan", "plan", "/help", "help"]:
        assert typed.lstrip("/") in COMMANDS


def test_command_parser_reads_options():
    args = create_command_parser("generate").parse_args(
        ["--players", "12", "--pattern", "random", "--seed", "4"]
    )

    assert args.players == 12
    assert args.pattern == "random"
    assert args.seed == 4
    assert args.rounds is None


def test_plan_command(capsys):
    assert main(["plan", "--players", "9"]) == 0

    output = capsys.readouterr().out
    assert "Swiss rounds: 4" in output
    assert "Top 4" in output


def test_plan_command_reports_engine_errors(capsys):
    assert main(["plan", "--players", "1"]) == 1
    assert "Error" in capsys.readouterr().out


def test_generate_then_validate(tmp_path, capsys):
    output = tmp_path / "event.json"

    assert main(
        ["generate", "--players", "12", "--seed", "9", "--validate", "--output", str(output)]
    ) == 0
    exported = json.loads(output.read_text(encoding="utf-8"))
    assert exported["simulation_config"]["num_participants"] == 12

    report_path = tmp_path / "report.json"
    assert main(
        ["validate", "--file", str(output), "--detailed", "--export", str(report_path)]
    ) == 0
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["checks"]
    assert "Validation Results" in capsys.readouterr().out


def test_validate_missing_file(tmp_path, capsys):
    assert main(["validate", "--file", str(tmp_path / "missing.json")]) == 1
    assert "File not found" in capsys.readouterr().out


def test_benchmark_command(capsys):
    assert main(["benchmark", "--size", "8", "--iterations", "2"]) == 0
    assert "Average" in capsys.readouterr().out
