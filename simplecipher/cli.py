"""Command line interface for simplecipher.

Usage examples:
  # Encrypt a string with a passphrase (AES-256-CBC, hex output)
  simplecipher encrypt --mode cbc --passphrase "correct horse" --data "Hello, World!"

  # Decrypt it again
  simplecipher decrypt --mode cbc --passphrase "correct horse" --data <ciphertext>

  # GCM needs a nonce passphrase; use a new one for every message
  simplecipher encrypt --mode gcm --passphrase "k" --nonce-passphrase "2024-06-01" --data "hi" --codec base64

  # Raw key and IV in hex
  simplecipher encrypt --mode ctr --key-hex 000102030405060708090a0b0c0d0e0f --iv-hex <32 hex chars> --data "hi"

  # Encrypt a file with a stream mode (raw bytes, IV first)
  simplecipher encrypt-stream --mode ctr --passphrase "k" --input plain.bin --output cipher.bin
"""
from __future__ import annotations

import sys
import argparse
import logging

from . import (
    BytesKey,
    HEX_CODEC,
    get_codec,
    new_random_iv,
    new_cbc,
    simple_cbc,
    new_cfb,
    simple_cfb,
    new_ofb,
    simple_ofb,
    new_ctr,
    simple_ctr,
    new_gcm,
    simple_gcm,
    new_cfb_stream,
    simple_cfb_stream,
    new_ofb_stream,
    simple_ofb_stream,
    new_ctr_stream,
    simple_ctr_stream,
)
from .block import Cipher
from .stream import Stream

STRING_MODES = ("cbc", "cfb", "ofb", "ctr", "gcm")
STREAM_MODES = ("cfb", "ofb", "ctr")

_NEW = {"cbc": new_cbc, "cfb": new_cfb, "ofb": new_ofb, "ctr": new_ctr}
_SIMPLE = {"cbc": simple_cbc, "cfb": simple_cfb, "ofb": simple_ofb, "ctr": simple_ctr}
_NEW_STREAM = {"cfb": new_cfb_stream, "ofb": new_ofb_stream, "ctr": new_ctr_stream}
_SIMPLE_STREAM = {"cfb": simple_cfb_stream, "ofb": simple_ofb_stream, "ctr": simple_ctr_stream}


def _hex_key(text: str | None) -> BytesKey | None:
    if text is None:
        return None
    return BytesKey(HEX_CODEC.decode_string(text))


def _get_cipher(args: argparse.Namespace) -> Cipher:
    codec = get_codec(args.codec) if args.codec else None
    if args.key_hex:
        key = _hex_key(args.key_hex)
        if args.mode == "gcm":
            if not args.nonce_hex:
                raise SystemExit("error: --mode gcm with --key-hex requires --nonce-hex")
            return new_gcm(key, _hex_key(args.nonce_hex), codec=codec)
        # decryption reads the IV from the ciphertext, so a random one is fine there
        iv = _hex_key(args.iv_hex) or new_random_iv()
        return _NEW[args.mode](key, iv, codec=codec)
    if args.passphrase is not None:
        if args.mode == "gcm":
            if args.nonce_passphrase is None:
                raise SystemExit("error: --mode gcm with --passphrase requires --nonce-passphrase")
            return simple_gcm(args.passphrase, args.nonce_passphrase, salt=args.salt, codec=codec)
        return _SIMPLE[args.mode](args.passphrase, salt=args.salt, codec=codec)
    raise SystemExit("error: must provide either --key-hex or --passphrase")


def _get_stream(args: argparse.Namespace) -> Stream:
    if args.key_hex:
        iv = _hex_key(args.iv_hex) or new_random_iv()
        return _NEW_STREAM[args.mode](_hex_key(args.key_hex), iv)
    if args.passphrase is not None:
        return _SIMPLE_STREAM[args.mode](args.passphrase, salt=args.salt)
    raise SystemExit("error: must provide either --key-hex or --passphrase")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="simplecipher", description="AES string and stream encryption")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--passphrase", type=str, help="Passphrase to derive an AES-256 key (scrypt)")
    common.add_argument("--key-hex", type=str, help="Raw AES key in hex (16, 24 or 32 bytes)")
    common.add_argument("--iv-hex", type=str, help="Raw IV in hex (16 bytes); random if omitted")
    common.add_argument("--salt", type=str, help="Salt for key derivation (defaults to the configured salt)")

    string_common = argparse.ArgumentParser(add_help=False, parents=[common])
    string_common.add_argument("--mode", choices=STRING_MODES, default="cbc", help="Cipher mode (default cbc)")
    string_common.add_argument("--nonce-passphrase", type=str, help="Passphrase to derive the GCM nonce")
    string_common.add_argument("--nonce-hex", type=str, help="Raw GCM nonce in hex (12 bytes)")
    string_common.add_argument("--codec", type=str, help="Ciphertext codec: nop, hex, base64, base64url, base32, base32hex")
    string_common.add_argument("--data", type=str, required=True, help="Plaintext or encoded ciphertext")

    sub.add_parser("encrypt", parents=[string_common], help="Encrypt a string")
    sub.add_parser("decrypt", parents=[string_common], help="Decrypt an encoded ciphertext string")

    stream_common = argparse.ArgumentParser(add_help=False, parents=[common])
    stream_common.add_argument("--mode", choices=STREAM_MODES, default="ctr", help="Stream mode (default ctr)")
    stream_common.add_argument("--input", type=str, required=True, help="Input file path")
    stream_common.add_argument("--output", type=str, required=True, help="Output file path")

    sub.add_parser("encrypt-stream", parents=[stream_common], help="Encrypt a file (raw bytes, IV first)")
    sub.add_parser("decrypt-stream", parents=[stream_common], help="Decrypt a file produced by encrypt-stream")

    return p


def cmd_encrypt(args: argparse.Namespace) -> int:
    print(_get_cipher(args).encrypt(args.data))
    return 0


def cmd_decrypt(args: argparse.Namespace) -> int:
    print(_get_cipher(args).decrypt(args.data))
    return 0


def cmd_stream(args: argparse.Namespace) -> int:
    stream = _get_stream(args)
    with open(args.input, "rb") as src, open(args.output, "wb") as dst:
        if args.cmd == "encrypt-stream":
            stream.encrypt_stream(src, dst)
        else:
            stream.decrypt_stream(src, dst)
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        if args.cmd == "encrypt":
            code = cmd_encrypt(args)
        elif args.cmd == "decrypt":
            code = cmd_decrypt(args)
        elif args.cmd in ("encrypt-stream", "decrypt-stream"):
            code = cmd_stream(args)
        else:
            code = 2
    except Exception as e:  # surface as message with non-zero exit
        print(f"error: {e}", file=sys.stderr)
        code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
