"""
Unit tests for the code derivation pipeline.
"""

import os
import re
import sys
import unittest
from unittest.mock import patch

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from fake_tools import BASE_TIMESTAMP, FakeEncoder
from wormrot.errors import BoundaryUnsafeError, CodeGenerationError
from wormrot.rotation import CodeGenerator, RotationScheduler, generate_code, period_key, code_prefix, sha256_hex
from wormrot.rotation.digest import decimal_digits

CODE_PATTERN = re.compile(r"^\d{1,3}(-[a-z]+)+$")


class TestDigest(unittest.TestCase):

    def test_known_sha256(self):
        self.assertEqual(
            sha256_hex("abc"),
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )
        self.assertEqual(sha256_hex(b"abc"), sha256_hex("abc"))

    def test_decimal_digits_keeps_order(self):
        self.assertEqual(decimal_digits("ba7816bf8f01"), "7816801")
        self.assertEqual(decimal_digits("abcdef"), "")


class TestPrefix(unittest.TestCase):

    def test_known_prefix(self):
        # digits of sha256("abc") start 78168; 78168 % 999 == 246
        self.assertEqual(code_prefix("abc"), 246)

    @patch('wormrot.rotation.code_generator.sha256_hex')
    def test_fewer_than_five_digits(self, mock_hash):
        mock_hash.return_value = "a1b2" + "f" * 60
        self.assertEqual(code_prefix("words"), 12)

    @patch('wormrot.rotation.code_generator.sha256_hex')
    def test_no_digits_reads_as_zero(self, mock_hash):
        mock_hash.return_value = "abcdef" * 10 + "abcd"
        self.assertEqual(code_prefix("words"), 0)

    @patch('wormrot.rotation.code_generator.sha256_hex')
    def test_only_first_five_digits_count(self, mock_hash):
        mock_hash.return_value = "a1b2c3d4e5f6789" + "f" * 49
        self.assertEqual(code_prefix("words"), 12345 % 999)

    def test_prefix_range(self):
        for words in ("acid-bacon", "zebra-yacht-walnut", "x"):
            self.assertTrue(0 <= code_prefix(words) < 999)


class TestGenerateCode(unittest.TestCase):

    def setUp(self):
        self.encoder = FakeEncoder()

    def test_period_key(self):
        self.assertEqual(period_key(BASE_TIMESTAMP, 60, "s3cr3t", "meta1"), "1699999980s3cr3tmeta1")
        self.assertEqual(period_key(BASE_TIMESTAMP, 60, "s3cr3t"), "1699999980s3cr3t")

    def test_encoder_receives_period_key_digest(self):
        generate_code(BASE_TIMESTAMP, 60, "s3cr3t", "", self.encoder)
        self.assertEqual(self.encoder.calls, [sha256_hex("1699999980s3cr3t")])

    def test_code_format(self):
        code = generate_code(BASE_TIMESTAMP, 60, "s3cr3t", "data1", self.encoder)
        self.assertRegex(code, CODE_PATTERN)
        prefix, words = code.split("-", 1)
        self.assertEqual(int(prefix), code_prefix(words))
        self.assertEqual(len(words.split("-")), 6)

    def test_pure(self):
        first = generate_code(BASE_TIMESTAMP, 60, "s3cr3t", "meta1", self.encoder)
        for _ in range(5):
            self.assertEqual(generate_code(BASE_TIMESTAMP, 60, "s3cr3t", "meta1", FakeEncoder()), first)

    def test_same_window_same_code(self):
        later_in_window = BASE_TIMESTAMP + 25
        self.assertEqual(
            generate_code(BASE_TIMESTAMP, 60, "s3cr3t", "", self.encoder),
            generate_code(later_in_window, 60, "s3cr3t", "", self.encoder),
        )

    def test_suffixes_give_distinct_codes(self):
        suffixes = ["", "meta1", "data1", "meta2", "data2", "meta10", "data10"]
        codes = {generate_code(BASE_TIMESTAMP, 60, "s3cr3t", s, self.encoder) for s in suffixes}
        self.assertEqual(len(codes), len(suffixes))

    def test_secret_changes_code(self):
        self.assertNotEqual(
            generate_code(BASE_TIMESTAMP, 60, "s3cr3t", "", self.encoder),
            generate_code(BASE_TIMESTAMP, 60, "other", "", self.encoder),
        )

    def test_next_window_changes_code(self):
        self.assertNotEqual(
            generate_code(BASE_TIMESTAMP, 60, "s3cr3t", "", self.encoder),
            generate_code(BASE_TIMESTAMP + 61, 60, "s3cr3t", "", self.encoder),
        )

    def test_encoder_failure_is_generation_error(self):
        class BrokenEncoder:
            def encode(self, hex_digest):
                raise OSError("HumanReadableSeed not found")

        with self.assertRaises(CodeGenerationError):
            generate_code(BASE_TIMESTAMP, 60, "s3cr3t", "", BrokenEncoder())

    def test_empty_words_is_generation_error(self):
        class SilentEncoder:
            def encode(self, hex_digest):
                return []

        with self.assertRaises(CodeGenerationError):
            generate_code(BASE_TIMESTAMP, 60, "s3cr3t", "", SilentEncoder())


class TestCodeGenerator(unittest.TestCase):

    def make_generator(self, timestamp: int) -> CodeGenerator:
        scheduler = RotationScheduler(60, clock=lambda: timestamp)
        scheduler.capture_base()
        return CodeGenerator(scheduler, "s3cr3t", FakeEncoder())

    def test_named_codes_match_suffixes(self):
        generator = self.make_generator(BASE_TIMESTAMP)
        encoder = FakeEncoder()
        self.assertEqual(generator.base_code(), generate_code(BASE_TIMESTAMP, 60, "s3cr3t", "", encoder))
        self.assertEqual(generator.meta_code(3), generate_code(BASE_TIMESTAMP, 60, "s3cr3t", "meta3", encoder))
        self.assertEqual(generator.data_code(3), generate_code(BASE_TIMESTAMP, 60, "s3cr3t", "data3", encoder))

    def test_base_code_checks_boundary(self):
        generator = self.make_generator(1_699_999_984)
        with self.assertRaises(BoundaryUnsafeError) as ctx:
            generator.base_code()
        self.assertEqual(ctx.exception.seconds_to_wait, 6)

    def test_item_codes_skip_boundary_check(self):
        generator = self.make_generator(1_699_999_984)
        self.assertRegex(generator.meta_code(1), CODE_PATTERN)
        self.assertRegex(generator.data_code(1), CODE_PATTERN)


if __name__ == "__main__":
    unittest.main()
