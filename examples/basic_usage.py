"""Basic usage example for simplecipher.

Run: python examples/basic_usage.py
"""
import io

import simplecipher


def main() -> None:
    # Pick an application-specific salt once, before any key is derived
    simplecipher.configure(salt="example-app-salt")

    cipher = simplecipher.simple_cbc("correct horse battery staple")
    ciphertext = cipher.encrypt("Hello, World!")
    print("CBC ciphertext (hex):", ciphertext)
    print("CBC plaintext:", cipher.decrypt(ciphertext))

    # GCM: change the nonce passphrase for every message and keep it for decryption
    gcm = simplecipher.simple_gcm("correct horse battery staple", "message-0001",
                                  codec=simplecipher.BASE64_STD_CODEC)
    sealed = gcm.encrypt("Hello, World!")
    print("GCM ciphertext (base64):", sealed)
    print("GCM plaintext:", gcm.decrypt(sealed))

    # Raw streams: the IV is written first, then the ciphertext bytes
    stream = simplecipher.simple_ctr_stream("correct horse battery staple")
    encrypted = io.BytesIO()
    stream.encrypt_stream(io.BytesIO(b"some file contents"), encrypted)
    decrypted = io.BytesIO()
    stream.decrypt_stream(io.BytesIO(encrypted.getvalue()), decrypted)
    print("CTR stream round trip:", decrypted.getvalue())


if __name__ == "__main__":
    main()
