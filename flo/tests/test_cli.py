"""
Tests for the flo command line

Drives run() / Session against an in-memory server, with user input
scripted through Renderer.ask.
"""

import pytest
from unittest.mock import patch

from conftest import make_answer, make_envelope, make_item, make_question, make_server


def script(renderer, *lines):
    """Feed lines to renderer.ask; end of input afterwards"""
    pending = list(lines)

    def ask(prompt):
        if not pending:
            raise EOFError
        return pending.pop(0)

    renderer.ask = ask


@pytest.fixture
def renderer(consoles):
    from flo.ui.render import Renderer
    out, err = consoles
    return Renderer(console=out, err_console=err)


def output(renderer):
    return renderer.console.file.getvalue()


def errors(renderer):
    return renderer.err_console.file.getvalue()


def answered_question():
    return make_envelope(make_item(make_question(
        question_id=1752414,
        score=312,
        title="How to reverse a string in Go?",
        tags=["go", "string"],
        answers=[
            make_answer(answer_id=1, score=50, body="Convert to a rune slice first.", owner="rob"),
            make_answer(answer_id=2, score=80, accepted=True, body="Use utf8.DecodeRuneInString.", owner="amy"),
        ],
    )))


class TestRun:
    """Tests for run()"""

    @pytest.mark.asyncio
    async def test_one_shot_prints_document(self, renderer):
        from flo.cli import run
        from flo.common.config import FloConfig
        from flo.remote.client import StackOverflowClient

        server, calls = make_server(answered_question())
        client = StackOverflowClient(server)

        status = await run("reverse a string in go", FloConfig(), renderer, interactive=False, client=client)

        assert status == 0
        out = output(renderer)
        assert "Connected!" in out
        assert "How to reverse a string in Go?" in out
        assert "Use utf8.DecodeRuneInString." in out
        assert "Convert to a rune slice first." in out
        assert "Powered by Stack Overflow via MCP" in out
        assert calls == [("so_search", "reverse a string in go")]
        assert not client.is_connected

    @pytest.mark.asyncio
    async def test_one_shot_search_error(self, renderer):
        from flo.cli import run
        from flo.common.config import FloConfig
        from flo.remote.client import StackOverflowClient

        server, _ = make_server("", search_error="rate limited")

        status = await run("q", FloConfig(), renderer, interactive=False, client=StackOverflowClient(server))

        assert status == 1
        assert "Search failed" in errors(renderer)
        assert "rate limited" in errors(renderer)

    @pytest.mark.asyncio
    async def test_one_shot_no_results(self, renderer):
        from flo.cli import run
        from flo.common.config import FloConfig
        from flo.remote.client import StackOverflowClient

        server, _ = make_server(make_envelope())

        status = await run("q", FloConfig(), renderer, interactive=False, client=StackOverflowClient(server))

        assert status == 0
        assert "No results found." in errors(renderer)

    @pytest.mark.asyncio
    async def test_connection_failure(self, renderer):
        from flo.cli import run
        from flo.common.config import FloConfig

        config = FloConfig()
        config.server.command = "flo-test-no-such-binary"

        status = await run("q", config, renderer, interactive=False)

        assert status == 1
        assert "Connection failed" in errors(renderer)
        assert "flo-test-no-such-binary not found" in errors(renderer)


class TestReportTransportError:
    """Tests for report_transport_error"""

    def test_missing_npx_shows_install_hint(self, renderer):
        from flo.cli import report_transport_error
        from flo.common.config import FloConfig
        from flo.common.errors import TransportError

        report_transport_error(renderer, TransportError("npx not found"), FloConfig())

        assert "Node.js not found" in errors(renderer)
        assert "brew install node" in errors(renderer)

    def test_other_failures(self, renderer):
        from flo.cli import report_transport_error
        from flo.common.config import FloConfig
        from flo.common.errors import TransportError

        report_transport_error(renderer, TransportError("MCP initialize handshake timed out after 180s"), FloConfig())

        assert "Connection failed" in errors(renderer)
        assert "timed out" in errors(renderer)


class TestInteractive:
    """Tests for the REPL and the answer selection menu"""

    @pytest.mark.asyncio
    async def test_select_answer_then_quit(self, renderer):
        from flo.cli import run
        from flo.common.config import FloConfig
        from flo.remote.client import StackOverflowClient

        server, calls = make_server(answered_question())
        script(renderer, "reverse a string in go", "1", "q")

        status = await run("", FloConfig(), renderer, interactive=True, client=StackOverflowClient(server))

        assert status == 0
        out = output(renderer)
        # accepted answer is listed first
        assert "1. ✅ [+80] amy: Use utf8.DecodeRuneInString." in out
        assert "2. [+50] rob: Convert to a rune slice first." in out
        assert "[Enter] back to answers" in out
        assert "Goodbye!" in out
        assert calls == [("so_search", "reverse a string in go")]

    @pytest.mark.asyncio
    async def test_invalid_choice_reprompts(self, renderer):
        from flo.cli import Session
        from flo.common.config import FloConfig
        from flo.stackoverflow.models import AnswerPayload

        answers = [AnswerPayload(answer_id=1, score=3), AnswerPayload(answer_id=2, score=1)]
        session = Session(None, renderer, FloConfig())
        script(renderer, "9", "abc", "")

        keep_going = await session.answer_selection_loop(answers)

        assert keep_going is True
        assert output(renderer).count("Pick a number between 1 and 2") == 2

    @pytest.mark.asyncio
    async def test_new_question_from_answer_view(self, renderer):
        from flo.cli import Session
        from flo.common.config import FloConfig
        from flo.stackoverflow.models import AnswerPayload

        session = Session(None, renderer, FloConfig())
        script(renderer, "1", "n")

        keep_going = await session.answer_selection_loop([AnswerPayload(answer_id=1, body_markdown="pick me")])

        assert keep_going is True
        assert "pick me" in output(renderer)

    @pytest.mark.asyncio
    async def test_back_to_answers_redisplays_menu(self, renderer):
        from flo.cli import Session
        from flo.common.config import FloConfig
        from flo.stackoverflow.models import AnswerPayload

        session = Session(None, renderer, FloConfig())
        script(renderer, "1", "", "quit")

        keep_going = await session.answer_selection_loop([AnswerPayload(answer_id=1, score=4)])

        assert keep_going is False
        assert output(renderer).count("1. [+4]") == 2

    @pytest.mark.asyncio
    async def test_menu_limited_by_max_answers(self, renderer):
        from flo.cli import Session
        from flo.common.config import FloConfig
        from flo.stackoverflow.models import AnswerPayload

        config = FloConfig()
        config.display.max_answers = 2
        session = Session(None, renderer, config)
        script(renderer, "")

        await session.answer_selection_loop([AnswerPayload(answer_id=i, score=10 - i) for i in range(4)])

        out = output(renderer)
        assert "2. [+9]" in out
        assert "3. [+8]" not in out

    @pytest.mark.asyncio
    async def test_exit_words_and_blank_lines(self, renderer):
        from flo.cli import run
        from flo.common.config import FloConfig
        from flo.remote.client import StackOverflowClient

        server, calls = make_server(make_envelope())
        script(renderer, "", "   ", "exit")

        status = await run("", FloConfig(), renderer, interactive=True, client=StackOverflowClient(server))

        assert status == 0
        assert calls == []
        assert "Goodbye!" in output(renderer)

    @pytest.mark.asyncio
    async def test_end_of_input_ends_session(self, renderer):
        from flo.cli import run
        from flo.common.config import FloConfig
        from flo.remote.client import StackOverflowClient

        server, _ = make_server(make_envelope())
        script(renderer)

        status = await run("", FloConfig(), renderer, interactive=True, client=StackOverflowClient(server))

        assert status == 0
        assert "Goodbye!" in output(renderer)

    @pytest.mark.asyncio
    async def test_question_without_answers_links_out(self, renderer):
        from flo.cli import run
        from flo.common.config import FloConfig
        from flo.remote.client import StackOverflowClient

        server, _ = make_server(make_envelope(make_item(make_question(question_id=31337, answer_count=4))))
        script(renderer, "anything", "q")

        status = await run("", FloConfig(), renderer, interactive=True, client=StackOverflowClient(server))

        assert status == 0
        assert "View on Stack Overflow: https://stackoverflow.com/questions/31337" in output(renderer)


class TestMain:
    """Tests for argument handling in main()"""

    def _run_main(self, argv):
        from flo.cli import main
        from flo.common.config import FloConfig

        captured = {}

        async def fake_run(query, config, renderer, interactive=True, client=None):
            captured.update(query=query, config=config, interactive=interactive)
            return 0

        with patch("flo.cli.load_config", return_value=FloConfig()), \
                patch("flo.cli.run", fake_run):
            status = main(argv)
        return status, captured

    def test_ask_prefix_and_overrides(self):
        status, captured = self._run_main(
            ["ask", "how", "to", "reverse", "--max-answers", "2", "--max-results", "3", "--no-select"]
        )

        assert status == 0
        assert captured["query"] == "how to reverse"
        assert captured["config"].display.max_answers == 2
        assert captured["config"].display.max_results == 3
        assert captured["interactive"] is False

    def test_no_query_is_interactive_mode(self):
        _, captured = self._run_main(["--no-select"])

        assert captured["query"] == ""

    def test_bare_ask(self):
        _, captured = self._run_main(["ask", "--no-select"])

        assert captured["query"] == ""

    def test_version(self, capsys):
        from flo.cli import main

        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "flo 0.1.0" in capsys.readouterr().out
