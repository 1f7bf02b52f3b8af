import os
import unittest
from unittest import mock

from simplecipher import config
from simplecipher import (
    DEFAULT_SALT,
    HEX_CODEC,
    BASE64_STD_CODEC,
    BASE32_STD_CODEC,
    Settings,
    configure,
    get_settings,
    default_salt,
    default_codec,
    new_aes_key,
    simple_cbc,
)


class TestSettingsFromEnv(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.salt, DEFAULT_SALT)
        self.assertIs(settings.codec, HEX_CODEC)

    def test_environment_overrides(self):
        env = {config.ENV_SALT: "env salt", config.ENV_CODEC: "base64"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.salt, "env salt")
        self.assertIs(settings.codec, BASE64_STD_CODEC)

    def test_unknown_codec_in_environment_falls_back_to_hex(self):
        with mock.patch.dict(os.environ, {config.ENV_CODEC: "rot13"}, clear=True):
            with self.assertLogs("simplecipher.config", "WARNING") as logs:
                settings = Settings.from_env()
        self.assertIs(settings.codec, HEX_CODEC)
        self.assertIn("rot13", logs.output[0])


class TestConfigure(unittest.TestCase):
    def setUp(self):
        settings = get_settings()
        self._saved = (settings.salt, settings.codec, config._salt_consumed)

    def tearDown(self):
        settings = get_settings()
        settings.salt, settings.codec, config._salt_consumed = self._saved

    def test_default_salt_is_stable(self):
        configure(salt="stable salt")
        self.assertEqual(default_salt(), "stable salt")
        self.assertEqual(default_salt(), default_salt())

    def test_salt_is_used_by_derived_keys(self):
        configure(salt="salt one")
        first = new_aes_key("passphrase")
        configure(salt="salt two")
        second = new_aes_key("passphrase")
        self.assertEqual(first.salt, "salt one")
        self.assertEqual(second.salt, "salt two")
        self.assertNotEqual(bytes(first), bytes(second))

    def test_late_salt_change_is_logged(self):
        configure(salt="early")
        default_salt()
        with self.assertLogs("simplecipher.config", "WARNING"):
            configure(salt="late")
        self.assertEqual(default_salt(), "late")

    def test_salt_must_be_str(self):
        with self.assertRaises(TypeError):
            configure(salt=b"bytes")

    def test_codec_by_name_and_instance(self):
        configure(codec="base32")
        self.assertIs(default_codec(), BASE32_STD_CODEC)
        configure(codec=BASE64_STD_CODEC)
        self.assertIs(default_codec(), BASE64_STD_CODEC)

    def test_ciphers_follow_default_codec(self):
        configure(salt="testsalt", codec="base64")
        cipher = simple_cbc("passphrase")
        ciphertext = cipher.encrypt("Hello")
        BASE64_STD_CODEC.decode_string(ciphertext)
        self.assertEqual(cipher.decrypt(ciphertext), "Hello")

    def test_explicit_codec_wins(self):
        configure(codec="base64")
        cipher = simple_cbc("passphrase", salt="testsalt", codec=HEX_CODEC)
        self.assertIs(cipher.codec, HEX_CODEC)
        self.assertEqual(len(cipher.encrypt("Hello")), 64)


if __name__ == '__main__':
    unittest.main()
