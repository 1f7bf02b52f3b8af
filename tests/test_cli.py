import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr

from simplecipher import cli


def run_cli(*argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        try:
            cli.main(list(argv))
        except SystemExit as e:
            code = e.code
    return code, out.getvalue().strip(), err.getvalue()


class TestStringCommands(unittest.TestCase):
    def test_passphrase_round_trip(self):
        for mode in ("cbc", "cfb", "ofb", "ctr"):
            with self.subTest(mode=mode):
                code, ciphertext, _ = run_cli("encrypt", "--mode", mode, "--passphrase", "pw",
                                              "--salt", "testsalt", "--data", "Hello, World!")
                self.assertEqual(code, 0)
                code, plaintext, _ = run_cli("decrypt", "--mode", mode, "--passphrase", "pw",
                                             "--salt", "testsalt", "--data", ciphertext)
                self.assertEqual(code, 0)
                self.assertEqual(plaintext, "Hello, World!")

    def test_raw_key_and_iv(self):
        key = "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
        iv = "000102030405060708090a0b0c0d0e0f"
        code, ciphertext, _ = run_cli("encrypt", "--mode", "ctr", "--key-hex", key, "--iv-hex", iv,
                                      "--data", "hi")
        self.assertEqual(code, 0)
        self.assertTrue(ciphertext.startswith(iv))
        code, plaintext, _ = run_cli("decrypt", "--mode", "ctr", "--key-hex", key, "--data", ciphertext)
        self.assertEqual((code, plaintext), (0, "hi"))

    def test_gcm_with_codec(self):
        args = ("--mode", "gcm", "--passphrase", "k", "--nonce-passphrase", "2024-06-01",
                "--salt", "testsalt", "--codec", "base64")
        code, ciphertext, _ = run_cli("encrypt", *args, "--data", "hi")
        self.assertEqual(code, 0)
        code, plaintext, _ = run_cli("decrypt", *args, "--data", ciphertext)
        self.assertEqual((code, plaintext), (0, "hi"))

    def test_gcm_requires_nonce(self):
        code, _, _ = run_cli("encrypt", "--mode", "gcm", "--passphrase", "k", "--data", "hi")
        self.assertNotEqual(code, 0)

    def test_missing_key(self):
        code, _, _ = run_cli("encrypt", "--data", "hi")
        self.assertNotEqual(code, 0)

    def test_bad_ciphertext_reports_error(self):
        code, out, err = run_cli("decrypt", "--passphrase", "pw", "--salt", "testsalt", "--data", "zz")
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("error:", err)


class TestStreamCommands(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def path(self, name):
        return os.path.join(self.tmp.name, name)

    def test_file_round_trip(self):
        data = os.urandom(100_000)
        with open(self.path("plain.bin"), "wb") as f:
            f.write(data)
        for mode in ("cfb", "ofb", "ctr"):
            with self.subTest(mode=mode):
                common = ("--mode", mode, "--passphrase", "pw", "--salt", "testsalt")
                code, _, _ = run_cli("encrypt-stream", *common,
                                     "--input", self.path("plain.bin"), "--output", self.path("cipher.bin"))
                self.assertEqual(code, 0)
                self.assertEqual(os.path.getsize(self.path("cipher.bin")), len(data) + 16)
                code, _, _ = run_cli("decrypt-stream", *common,
                                     "--input", self.path("cipher.bin"), "--output", self.path("out.bin"))
                self.assertEqual(code, 0)
                with open(self.path("out.bin"), "rb") as f:
                    self.assertEqual(f.read(), data)

    def test_missing_input_file(self):
        code, _, err = run_cli("encrypt-stream", "--passphrase", "pw", "--input", self.path("nope"),
                               "--output", self.path("out.bin"))
        self.assertEqual(code, 2)
        self.assertIn("error:", err)


if __name__ == '__main__':
    unittest.main()
