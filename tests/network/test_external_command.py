"""
Unit tests for the external process layer: command runner, encoder client and
wormhole client argument lists.
"""

import subprocess
import unittest
from unittest.mock import patch

from wormrot.errors import CodeGenerationError, TransferTimeoutError, TransferToolError
from wormrot.network import ExternalCommand, HumanReadableSeedEncoder, WormholeClient
from wormrot.ui.logging import Logger

RUN_TARGET = 'wormrot.network.external_command.subprocess.run'


def completed(argv, returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr=stderr)


class TestExternalCommand(unittest.TestCase):

    @patch(RUN_TARGET)
    def test_argv_is_a_list(self, mock_run):
        mock_run.return_value = completed([], stdout="ok\n")
        command = ExternalCommand(["uvx", "--quiet", "tool"], timeout=5)

        result = command.run(["a b", "c"], capture=True, cwd="/tmp")

        mock_run.assert_called_once_with(
            ["uvx", "--quiet", "tool", "a b", "c"],
            capture_output=True, text=True, timeout=5, cwd="/tmp"
        )
        self.assertTrue(result.ok)
        self.assertEqual(result.stdout, "ok\n")

    @patch(RUN_TARGET)
    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(["tool"], 5)
        command = ExternalCommand(["tool"], timeout=5)

        with self.assertRaises(TransferTimeoutError) as ctx:
            command.run(["receive"])
        self.assertIsInstance(ctx.exception, TransferToolError)
        self.assertIn("timed out", str(ctx.exception))

    @patch(RUN_TARGET)
    def test_missing_executable(self, mock_run):
        mock_run.side_effect = FileNotFoundError("no such file: tool")
        with self.assertRaises(TransferToolError):
            ExternalCommand(["tool"]).run(["send"])

    @patch(RUN_TARGET)
    def test_check_reports_redacted_command(self, mock_run):
        mock_run.return_value = completed([], returncode=3, stderr="bad s3cr3t\n")
        command = ExternalCommand(["tool"], redact=lambda text: text.replace("s3cr3t", "***"))

        result = command.run(["send", "--text", "s3cr3t"])
        with self.assertRaises(TransferToolError) as ctx:
            command.check(result, "send text")

        self.assertEqual(ctx.exception.returncode, 3)
        self.assertEqual(ctx.exception.command, ["tool", "send", "--text", "***"])
        self.assertNotIn("s3cr3t", str(ctx.exception))
        self.assertIn("exited with code 3", str(ctx.exception))

    @patch(RUN_TARGET)
    def test_check_keeps_codes_that_contain_the_secret(self, mock_run):
        mock_run.return_value = completed([], returncode=1)
        logger = Logger()
        logger.add_redaction("umbrel")
        command = ExternalCommand(["wormhole"], redact=logger.redact)

        result = command.run(["send", "--text", "umbrel", "--code", "7-umbrella-acid"])
        with self.assertRaises(TransferToolError) as ctx:
            command.check(result, "send text")

        self.assertEqual(ctx.exception.command, ["wormhole", "send", "--text", "***", "--code", "7-umbrella-acid"])
        self.assertIn("--text *** --code 7-umbrella-acid", str(ctx.exception))

    def test_empty_base_argv(self):
        with self.assertRaises(ValueError):
            ExternalCommand([])


class TestHumanReadableSeedEncoder(unittest.TestCase):

    @patch(RUN_TARGET)
    def test_encode(self, mock_run):
        mock_run.return_value = completed([], stdout="alpha bravo  charlie\n")
        encoder = HumanReadableSeedEncoder(["HumanReadableSeed"], timeout=10)

        self.assertEqual(encoder.encode("ab12"), ["alpha", "bravo", "charlie"])
        self.assertEqual(mock_run.call_args[0][0], ["HumanReadableSeed", "toread", "ab12"])

    @patch(RUN_TARGET)
    def test_non_zero_exit(self, mock_run):
        mock_run.return_value = completed([], returncode=1, stderr="boom")
        with self.assertRaises(CodeGenerationError):
            HumanReadableSeedEncoder(["HumanReadableSeed"]).encode("ab12")

    @patch(RUN_TARGET)
    def test_empty_output(self, mock_run):
        mock_run.return_value = completed([], stdout="  \n")
        with self.assertRaises(CodeGenerationError):
            HumanReadableSeedEncoder(["HumanReadableSeed"]).encode("ab12")

    @patch(RUN_TARGET)
    def test_unavailable(self, mock_run):
        mock_run.side_effect = FileNotFoundError("HumanReadableSeed")
        with self.assertRaises(CodeGenerationError):
            HumanReadableSeedEncoder(["HumanReadableSeed"]).encode("ab12")


class TestWormholeClient(unittest.TestCase):

    def setUp(self):
        self.client = WormholeClient(
            ExternalCommand(["wormhole"], timeout=30),
            send_args=["--no-qr", "--hide-progress"],
            receive_args=["--accept-file", "--hide-progress"],
        )

    @patch(RUN_TARGET)
    def test_send_text(self, mock_run):
        mock_run.return_value = completed([])
        self.client.send_text('{"number_of_files": 1}', "12-acid-bacon")
        self.assertEqual(mock_run.call_args[0][0], [
            "wormhole", "send", "--text", '{"number_of_files": 1}',
            "--no-qr", "--hide-progress", "--code", "12-acid-bacon",
        ])

    @patch(RUN_TARGET)
    def test_send_path(self, mock_run):
        mock_run.return_value = completed([])
        self.client.send_path("my file.txt", "12-acid-bacon")
        self.assertEqual(mock_run.call_args[0][0], [
            "wormhole", "send", "my file.txt", "--no-qr", "--hide-progress", "--code", "12-acid-bacon",
        ])

    @patch(RUN_TARGET)
    def test_receive_text(self, mock_run):
        mock_run.return_value = completed([], stdout='{"number_of_files": 2}\n')
        self.assertEqual(self.client.receive_text("7-eagle"), '{"number_of_files": 2}')
        self.assertEqual(mock_run.call_args[0][0], [
            "wormhole", "receive", "--only-text", "--accept-file", "--hide-progress", "7-eagle",
        ])
        self.assertTrue(mock_run.call_args[1]["capture_output"])

    @patch(RUN_TARGET)
    def test_receive_path_with_output_name(self, mock_run):
        mock_run.return_value = completed([])
        self.client.receive_path("7-eagle", "/downloads", output_name="report_1.pdf")
        self.assertEqual(mock_run.call_args[0][0], [
            "wormhole", "receive", "--accept-file", "--hide-progress",
            "--output-file", "report_1.pdf", "7-eagle",
        ])
        self.assertEqual(mock_run.call_args[1]["cwd"], "/downloads")

    @patch(RUN_TARGET)
    def test_failure_is_transfer_tool_error(self, mock_run):
        mock_run.return_value = completed([], returncode=1)
        with self.assertRaises(TransferToolError):
            self.client.receive_path("7-eagle", "/downloads")


if __name__ == "__main__":
    unittest.main()
