from crcdiff.cli import build_parser, main


def test_cli_help_lists_subcommands(capsys):
    parser = build_parser()
    try:
        parser.parse_args(["--help"])
    except SystemExit:
        pass

    output = capsys.readouterr().out
    assert "create" in output
    assert "validate" in output
    assert "changes" in output


def test_help_command_prints_usage(capsys):
    assert main(["help"]) == 0
    assert "usage: crcdiff" in capsys.readouterr().out
