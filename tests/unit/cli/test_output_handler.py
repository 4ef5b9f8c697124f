"""Unit tests for cli.output module."""

from src.cli.output import OutputHandler


class TestOutputHandlerInit:
    """Test cases for OutputHandler initialization."""

    def test_init_default_verbosity_and_color(self):
        """Initialize with default verbosity (0) and color enabled."""
        handler = OutputHandler()

        assert handler.verbosity == 0
        assert handler.console.no_color is False

    def test_init_no_color_true(self):
        """Initialize with no_color=True disables colors."""
        handler = OutputHandler(no_color=True)

        assert handler.console.no_color is True
        assert handler.error_console.no_color is True


class TestOutputHandlerMessages:
    """Test cases for message display."""

    def test_success_goes_to_stdout(self, capsys):
        OutputHandler(no_color=True).success("Comment 42 removed")

        captured = capsys.readouterr()
        assert "Comment 42 removed" in captured.out
        assert "✓" in captured.out

    def test_error_goes_to_stderr(self, capsys):
        OutputHandler(no_color=True).error("Login failure")

        captured = capsys.readouterr()
        assert "Login failure" in captured.err
        assert captured.out == ""

    def test_info_hidden_at_verbosity_0(self, capsys):
        OutputHandler(verbosity=0).info("details")

        assert capsys.readouterr().out == ""

    def test_info_shown_at_verbosity_1(self, capsys):
        OutputHandler(verbosity=1).info("details")

        assert "details" in capsys.readouterr().out

    def test_result_printed_verbatim(self, capsys):
        """Results are not interpreted as Rich markup."""
        OutputHandler().result("[bold]Guide[/bold]")

        assert capsys.readouterr().out == "[bold]Guide[/bold]\n"

    def test_long_result_not_wrapped(self, capsys):
        url = "https://wiki.example.org/docs/" + "A" * 200
        OutputHandler().result(url)

        assert capsys.readouterr().out == url + "\n"

    def test_spinner_without_terminal_just_runs(self, capsys):
        """Without a terminal the spinner is skipped."""
        ran = []
        with OutputHandler().spinner("Working..."):
            ran.append(True)

        assert ran == [True]
        assert "Working" not in capsys.readouterr().out
