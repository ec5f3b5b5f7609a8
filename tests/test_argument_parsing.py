"""
Tests for CLI argument parsing and validation.
"""
import sys
from unittest import mock
import pytest
from dupelink.cli import CLIApplication
from dupelink.core.models import Algorithm, KeepCriteria, Mode
from dupelink.utils.convert_utils import UNBOUNDED


class TestArgumentParsing:
    """Test CLI argument parsing with argparse."""

    def test_defaults(self):
        app = CLIApplication()
        with mock.patch.object(sys, 'argv', ['dupelink', '-k', 'latest']):
            args = app.parse_args()

        assert args.path == "."
        assert args.recursive is False
        assert args.dry_run is False
        assert args.mode == "symlink"
        assert args.algorithm == "md5"
        assert args.ignore == ".lnk,.url"
        assert args.min_size == "1MB"
        assert args.max_size == "1TB"
        assert args.threads is None
        assert args.trash is False

    def test_short_and_long_forms(self):
        app = CLIApplication()
        with mock.patch.object(sys, 'argv', [
            'dupelink', '-p', '/data', '-r', '-d', '-k', 'deepest', '-m', 'hardlink',
            '-a', 'xxh64', '-i', '.tmp', '-t', '4'
        ]):
            short = app.parse_args()
        with mock.patch.object(sys, 'argv', [
            'dupelink', '--path', '/data', '--recursive', '--dry-run', '--keep', 'deepest',
            '--mode', 'hardlink', '--algorithm', 'xxh64', '--ignore', '.tmp', '--threads', '4'
        ]):
            long = app.parse_args()

        assert vars(short) == vars(long)
        assert short.path == "/data"
        assert short.threads == 4

    def test_keep_is_required(self):
        with mock.patch.object(sys, 'argv', ['dupelink']):
            with pytest.raises(SystemExit) as exc_info:
                CLIApplication().parse_args()
        assert exc_info.value.code == 2

    @pytest.mark.parametrize("flag, value", [
        ("-k", "biggest"),
        ("-m", "copy"),
        ("-a", "sha1"),
    ])
    def test_rejects_unknown_choices(self, flag, value):
        with pytest.raises(SystemExit):
            CLIApplication().parse_args(['-k', 'first', flag, value])

    def test_every_enum_value_is_a_choice(self):
        for keep in KeepCriteria:
            assert CLIApplication.parse_args(['-k', keep.value]).keep == keep.value
        for mode in Mode:
            assert CLIApplication.parse_args(['-k', 'first', '-m', mode.value]).mode == mode.value
        for algorithm in Algorithm:
            assert CLIApplication.parse_args(['-k', 'first', '-a', algorithm.value]).algorithm == algorithm.value


class TestValidation:
    """validate_args / create_params exit with status 1 on bad input."""

    @pytest.mark.parametrize("argv, message", [
        (['-k', 'first', '--trash'], "--trash can only be used with --mode delete"),
        (['-k', 'first', '-q', '-v'], "cannot be used together"),
        (['-k', 'first', '-t', '0'], "Thread count"),
        (['-k', 'first', '--min-size', 'big'], "Invalid size format"),
        (['-k', 'first', '--min-size', '2MB', '--max-size', '1MB'], "Maximum size cannot be less"),
    ])
    def test_invalid_combinations_exit(self, argv, message, capsys):
        app = CLIApplication()
        args = app.parse_args(argv)
        with pytest.raises(SystemExit) as exc_info:
            app.validate_args(args)
        assert exc_info.value.code == 1
        assert message in capsys.readouterr().err

    def test_trash_with_delete_is_valid(self):
        app = CLIApplication()
        app.validate_args(app.parse_args(['-k', 'first', '-m', 'delete', '--trash']))

    def test_create_params(self):
        app = CLIApplication()
        args = app.parse_args([
            '-p', '/data', '-k', 'oldest', '-m', 'delete', '-a', 'sha256',
            '--min-size', '0', '--max-size', '-1', '-i', 'Thumbs.db,.tmp', '--trash', '-r', '-d'
        ])
        params = app.create_params(args)

        assert params.root_dir == "/data"
        assert params.keep == KeepCriteria.OLDEST
        assert params.mode == Mode.DELETE
        assert params.algorithm == Algorithm.SHA256
        assert params.min_size_bytes == 0
        assert params.max_size_bytes == UNBOUNDED
        assert params.ignore == ["Thumbs.db", ".tmp"]
        assert params.use_trash is True
        assert params.recursive is True
        assert params.dry_run is True


class TestHelpText:

    def test_ignore_help_describes_suffix_matching(self, capsys):
        with pytest.raises(SystemExit):
            CLIApplication.parse_args(['--help'])
        help_text = capsys.readouterr().out
        assert "file or directory names" in help_text
        assert ".git skips foo.git too" in help_text
