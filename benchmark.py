#!/usr/bin/env python3
"""
Throughput benchmark for turbounescape against the standard library's
html.unescape. Decodes every file under a directory (or a synthetic corpus
of entity-heavy text) and reports time per file.
"""

from __future__ import annotations

import argparse
import pathlib
import random
import sys
import time

SAMPLE_REFERENCES = [
    "&amp;", "&lt;", "&gt;", "&quot;", "&nbsp;", "&copy", "&times;", "&notin;",
    "&#160;", "&#x2022;", "&#x95;", "&#8212;", "&hellip;", "&bogus;", "&", "&#;",
]


def load_files(directory: pathlib.Path, pattern: str, limit: int | None) -> list:
    files = []
    for path in sorted(directory.rglob(pattern)):
        if not path.is_file():
            continue
        files.append((str(path), path.read_bytes()))
        if limit and len(files) >= limit:
            break
    return files


def synthetic_files(count: int, seed: int = 0) -> list:
    rng = random.Random(seed)
    files = []
    for i in range(count):
        parts = []
        for _ in range(2000):
            parts.append("".join(rng.choices("abcdefghij klmnop", k=rng.randint(0, 40))))
            parts.append(rng.choice(SAMPLE_REFERENCES))
        files.append((f"synthetic-{i:03d}", "".join(parts).encode("utf-8")))
    return files


def _time_decoder(decode_fn, files: list, iterations: int) -> dict:
    all_times = []
    errors = 0
    error_files = []
    if files:
        decode_fn(files[0][1])
    for _ in range(iterations):
        for filename, data in files:
            try:
                start = time.perf_counter()
                decode_fn(data)
                all_times.append(time.perf_counter() - start)
            except Exception as e:
                errors += 1
                error_files.append((filename, str(e)))
    return {
        "total_time": sum(all_times),
        "mean_time": sum(all_times) / len(all_times) if all_times else 0,
        "min_time": min(all_times) if all_times else 0,
        "max_time": max(all_times) if all_times else 0,
        "errors": errors,
        "success_count": len(all_times),
        "error_files": error_files,
    }


def benchmark_turbounescape(files: list, iterations: int = 1) -> dict:
    """Benchmark turbounescape in general text context."""
    try:
        from turbounescape import decode_general
    except ImportError:
        return {"error": "turbounescape not importable"}
    return _time_decoder(decode_general, files, iterations)


def benchmark_turbounescape_attribute(files: list, iterations: int = 1) -> dict:
    """Benchmark turbounescape in attribute context."""
    try:
        from turbounescape import decode_attribute
    except ImportError:
        return {"error": "turbounescape not importable"}
    return _time_decoder(decode_attribute, files, iterations)


def benchmark_html_unescape(files: list, iterations: int = 1) -> dict:
    """Benchmark html.unescape (includes the UTF-8 decode it needs)."""
    import html

    return _time_decoder(lambda data: html.unescape(data.decode("utf-8", "replace")), files, iterations)


BENCHMARKS = {
    "turbounescape": benchmark_turbounescape,
    "turbounescape-attr": benchmark_turbounescape_attribute,
    "html.unescape": benchmark_html_unescape,
}


def print_results(results: dict, file_count: int, iterations: int = 1):
    """Pretty print benchmark results."""
    print("\n" + "=" * 80)
    if iterations > 1:
        print(f"BENCHMARK RESULTS ({file_count} files x {iterations} iterations)")
    else:
        print(f"BENCHMARK RESULTS ({file_count} files)")
    print("=" * 80)
    print(f"\n{'Decoder':<20} {'Total (s)':<10} {'Mean (ms)':<10} {'Errors':<8}")
    print("-" * 80)

    baseline = results.get("turbounescape", {}).get("total_time", 0)
    for name, result in results.items():
        if "error" in result:
            print(f"{name:<20} {result['error']}")
            continue
        total = result["total_time"]
        speedup = ""
        if name != "turbounescape" and baseline > 0 and total > 0:
            speedup = f" ({total / baseline:.2f}x)"
        print(f"{name:<20} {total:<10.3f} {result['mean_time'] * 1000:<10.3f} {result['errors']:<8}{speedup}")

    for name, result in results.items():
        for filename, error_msg in result.get("error_files", []):
            print(f"  {name}: {filename}: {error_msg}")


def main():
    parser = argparse.ArgumentParser(description="Benchmark character reference decoding")
    parser.add_argument("--dir", type=pathlib.Path, help="Directory of files to decode (default: synthetic corpus)")
    parser.add_argument("--pattern", default="*.html", help="Glob for files under --dir (default: *.html)")
    parser.add_argument(
        "--limit", type=int, default=100, help="Limit number of files to test (default: 100, use 0 for all)",
    )
    parser.add_argument(
        "--iterations", type=int, default=5, help="Number of iterations to run for averaging (default: 5)",
    )
    parser.add_argument(
        "--decoders",
        nargs="+",
        choices=list(BENCHMARKS),
        default=list(BENCHMARKS),
        help="Decoders to benchmark (default: all)",
    )
    args = parser.parse_args()

    limit = args.limit if args.limit > 0 else None
    if args.dir:
        print(f"Loading files from {args.dir}...")
        files = load_files(args.dir, args.pattern, limit)
    else:
        files = synthetic_files(limit or 100)
    if not files:
        print("ERROR: No files loaded")
        sys.exit(1)
    total_bytes = sum(len(data) for _, data in files)
    print(f"Loaded {len(files)} files, {total_bytes / 1024 / 1024:.2f} MB")

    results = {}
    for name in args.decoders:
        print(f"\nBenchmarking {name}...", end="", flush=True)
        results[name] = BENCHMARKS[name](files, args.iterations)
        if "error" in results[name]:
            print(f" SKIPPED ({results[name]['error']})")
        else:
            print(f" DONE ({results[name]['total_time']:.3f}s)")

    print_results(results, len(files), args.iterations)


if __name__ == "__main__":
    main()
