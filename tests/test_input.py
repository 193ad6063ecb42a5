"""Regression tests for raw-key decoding.

Covers CSI arrow sequences, single-byte bindings, swallowed escapes and the
canonical line reader used by the rename prompt.
"""

import os
import unittest

from termbrowse import input as input_mod
from termbrowse.input import Command


def _decode_bytes(payload: bytes, reads: int = 1) -> list[Command]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, payload)
        os.close(write_fd)
        write_fd = -1
        return [input_mod.read_command(read_fd) for _ in range(reads)]
    finally:
        os.close(read_fd)
        if write_fd != -1:
            os.close(write_fd)


class ReadCommandTests(unittest.TestCase):
    def test_arrow_sequences_map_to_movement(self) -> None:
        self.assertEqual(_decode_bytes(b"\x1b[A\x1b[B", reads=2), [Command.MOVE_UP, Command.MOVE_DOWN])

    def test_single_byte_bindings(self) -> None:
        self.assertEqual(
            _decode_bytes(b"\nbrmq", reads=5),
            [Command.OPEN, Command.BACK, Command.RENAME, Command.MOVE, Command.QUIT],
        )

    def test_unknown_escape_sequence_is_swallowed_whole(self) -> None:
        # ESC [ C (right arrow) consumes both continuation bytes; 'q' is next.
        self.assertEqual(_decode_bytes(b"\x1b[Cq", reads=2), [Command.NOOP, Command.QUIT])

    def test_escape_always_consumes_two_more_bytes(self) -> None:
        self.assertEqual(_decode_bytes(b"\x1bxyb", reads=2), [Command.NOOP, Command.BACK])

    def test_other_bytes_are_noop(self) -> None:
        self.assertEqual(_decode_bytes(b"xQ\r", reads=3), [Command.NOOP, Command.NOOP, Command.NOOP])

    def test_end_of_input_quits(self) -> None:
        self.assertEqual(_decode_bytes(b""), [Command.QUIT])

    def test_truncated_escape_at_end_of_input_quits(self) -> None:
        self.assertEqual(_decode_bytes(b"\x1b["), [Command.QUIT])


class DecodeKeyTests(unittest.TestCase):
    def test_every_binding_decodes_to_a_distinct_command(self) -> None:
        bound = list(input_mod.SINGLE_BYTE_COMMANDS.values()) + list(input_mod.ESCAPE_SEQUENCE_COMMANDS.values())
        self.assertEqual(len(bound), len(set(bound)))
        self.assertEqual(set(bound) | {Command.NOOP}, set(Command))

    def test_escape_without_sequence_is_noop(self) -> None:
        self.assertIs(input_mod.decode_key(27), Command.NOOP)


class ReadLineTests(unittest.TestCase):
    def _read_line(self, payload: bytes) -> str | None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            os.close(write_fd)
            write_fd = -1
            return input_mod.read_line(read_fd)
        finally:
            os.close(read_fd)
            if write_fd != -1:
                os.close(write_fd)

    def test_reads_up_to_newline(self) -> None:
        self.assertEqual(self._read_line(b"new name.txt\nrest"), "new name.txt")

    def test_strips_carriage_return(self) -> None:
        self.assertEqual(self._read_line(b"abc\r\n"), "abc")

    def test_returns_partial_line_at_end_of_input(self) -> None:
        self.assertEqual(self._read_line(b"tail"), "tail")

    def test_returns_none_on_immediate_end_of_input(self) -> None:
        self.assertIsNone(self._read_line(b""))

    def test_decodes_utf8(self) -> None:
        self.assertEqual(self._read_line("résumé\n".encode("utf-8")), "résumé")


if __name__ == "__main__":
    unittest.main()
