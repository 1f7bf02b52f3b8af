"""
simplecipher Performance Benchmark

Methodology:
- Measures average encryption/decryption time per mode over configurable loops and data size.
- Reports throughput (KiB/s) per mode and the average scrypt key derivation time.
- Captures environment metadata (Python version, platform, CPU count, params).
- Writes timestamped JSON outputs to benchmarks/outputs and also updates latest.json.

Reproduction:
- Example: python benchmarks/perf_test.py --loops 1000 --data-size 1024 --modes cbc,ctr,gcm
"""
import argparse
import json
import time
from pathlib import Path
import platform
import os
from datetime import datetime

# Allow running this script directly without installing the package
import sys as _sys
from pathlib import Path as _Path
_sys.path.insert(0, str(_Path(__file__).resolve().parents[1]))

from simplecipher import (
    BytesKey,
    NOP_CODEC,
    derive_key,
    new_aes_key,
    new_random_iv,
    new_cbc,
    new_cfb,
    new_ofb,
    new_ctr,
    new_gcm,
)
from simplecipher.pkcs7 import pad

MODES = ("cbc", "cfb", "ofb", "ctr", "gcm")


def time_kdf(rounds: int = 20) -> float:
    """Average time of one AES-256 key derivation, in ms."""
    start = time.perf_counter()
    for i in range(rounds):
        derive_key(f"benchmark passphrase {i}", 32, "benchmark salt")
    return (time.perf_counter() - start) * 1000 / rounds


def make_cipher(mode: str):
    # derive once so the loop measures the mode, not scrypt
    key = BytesKey(bytes(new_aes_key("benchmark", salt="benchmark salt")))
    if mode == "gcm":
        return new_gcm(key, BytesKey(os.urandom(12)), codec=NOP_CODEC)
    factory = {"cbc": new_cbc, "cfb": new_cfb, "ofb": new_ofb, "ctr": new_ctr}[mode]
    return factory(key, new_random_iv(), codec=NOP_CODEC)


def bench_mode(mode: str, loops: int, data_size: int) -> dict:
    cipher = make_cipher(mode)
    time_enc: list[float] = [0.0] * loops
    time_dec: list[float] = [0.0] * loops

    for i in range(loops):
        data: bytes = os.urandom(data_size)
        if mode == "cbc":
            data = pad(16, data)
        now: float = time.perf_counter()
        ciphertext = cipher.encrypt(data)
        time_enc[i] = (time.perf_counter() - now) * 1000
        now = time.perf_counter()
        cipher.decrypt(ciphertext)
        time_dec[i] = (time.perf_counter() - now) * 1000

    avg_enc = sum(time_enc) / max(1, loops)
    avg_dec = sum(time_dec) / max(1, loops)
    kib_s = data_size / (avg_enc / 1000) / 1024 if avg_enc > 0 else float('inf')
    print(f"[{mode}] enc {avg_enc:.4f} ms, dec {avg_dec:.4f} ms, {kib_s:.2f} KiB/s")
    return {"avg_enc_ms": avg_enc, "avg_dec_ms": avg_dec, "throughput_kib_s": kib_s}


def run_benchmark(loops: int, data_size: int, modes: list[str], outputs_dir: Path) -> dict:
    print(f"Running performance test with {loops} loops of {data_size} bytes each for {', '.join(modes)}")
    wall_start_dt = datetime.now()

    metrics: dict = {mode: bench_mode(mode, loops, data_size) for mode in modes}
    kdf_ms = time_kdf()
    metrics["kdf_ms"] = kdf_ms
    print(f"Average scrypt derivation time: {kdf_ms:.3f} ms")

    outputs_dir.mkdir(parents=True, exist_ok=True)
    latest_path = outputs_dir / "latest.json"

    # Load previous latest for diff (if any)
    prev = None
    if latest_path.exists():
        try:
            with latest_path.open("r", encoding="utf-8") as f:
                prev = json.load(f)
        except (OSError, ValueError):
            prev = None

    meta = {
        "timestamp": wall_start_dt.isoformat(timespec="seconds"),
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "os": os.name,
        "cpu_count": os.cpu_count(),
        "params": {
            "loops": loops,
            "data_size": data_size,
            "modes": modes,
        },
    }
    results = {"metrics": metrics, "meta": meta}

    ts_name = datetime.now().strftime("results_%Y%m%d_%H%M%S.json")
    ts_path = outputs_dir / ts_name
    with ts_path.open("w", encoding="utf-8") as f:
        json.dump(results, f, indent=2)
    with latest_path.open("w", encoding="utf-8") as f:
        json.dump(results, f, indent=2)

    # Print diffs relative to previous latest
    if prev and isinstance(prev, dict):
        pmet = prev.get("metrics", {})
        if isinstance(pmet.get("kdf_ms"), (int, float)):
            print(f"kdf_ms change: {kdf_ms - pmet['kdf_ms']:+.3f}")
        for mode in modes:
            old = pmet.get(mode)
            if not isinstance(old, dict):
                continue
            for key in ("avg_enc_ms", "avg_dec_ms", "throughput_kib_s"):
                if isinstance(old.get(key), (int, float)):
                    print(f"[{mode}] {key} change: {metrics[mode][key] - old[key]:+.3f}")

    return {
        "results_path": str(ts_path),
        "latest_path": str(latest_path),
        **results,
    }


def _modes(text: str) -> list[str]:
    modes = [m.strip().lower() for m in text.split(",") if m.strip()]
    unknown = [m for m in modes if m not in MODES]
    if unknown:
        raise argparse.ArgumentTypeError(f"unknown mode(s): {', '.join(unknown)}")
    return modes


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="simplecipher benchmark: per-mode encryption/decryption performance")
    p.add_argument("--loops", type=int, default=10_000, help="Number of encryption/decryption loops per mode")
    p.add_argument("--data-size", type=int, default=64, help="Random plaintext size in bytes per loop")
    p.add_argument("--modes", type=_modes, default=list(MODES), help="Comma separated modes (default: all)")
    p.add_argument("--outputs-dir", type=str, default=str(Path(__file__).resolve().parent / "outputs"),
                   help="Directory to write timestamped results and latest.json (default: benchmarks/outputs)")
    return p


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    run_benchmark(
        loops=args.loops,
        data_size=args.data_size,
        modes=args.modes,
        outputs_dir=Path(args.outputs_dir),
    )


if __name__ == "__main__":
    main()
